"""Move-history rendering as numbered White/Black pairs."""

from __future__ import annotations

from collections.abc import Sequence


def format_move_list(sans: Sequence[str], first_ply: int = 0) -> str:
    """Render SAN plies as ``"1. e4 e5"`` lines, one line per move number.

    *first_ply* is the ``move_counter`` value before the first entry; a game
    set up with black to move starts with ``"N. ... move"``.
    """
    lines: list[str] = []
    parts: list[str] = []
    for offset, san in enumerate(sans):
        ply = first_ply + offset
        if ply % 2 == 0:
            if parts:
                lines.append(" ".join(parts))
            parts = [f"{(ply // 2) + 1}.", san]
        else:
            if not parts:
                parts = [f"{(ply // 2) + 1}.", "..."]
            parts.append(san)
    if parts:
        lines.append(" ".join(parts))
    return "\n".join(lines)
