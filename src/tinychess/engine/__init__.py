"""Chess engine package: search models and the pure-Python searcher.

The Qt worker bridge lives in :mod:`tinychess.engine.qt_bridge` and is
imported explicitly by frontends that run searches on a ``QThread``.
"""

from tinychess.engine.python_search import PythonSearchEngine, mate_distance
from tinychess.engine.search import (
    KING_VALUE,
    KING_VALUE_DIV_2,
    Evaluation,
    IEngine,
    Reply,
    SearchLimits,
    SearchResult,
)

DefaultEngine: type[IEngine] = PythonSearchEngine

__all__ = [
    "DefaultEngine",
    "Evaluation",
    "IEngine",
    "KING_VALUE",
    "KING_VALUE_DIV_2",
    "PythonSearchEngine",
    "Reply",
    "SearchLimits",
    "SearchResult",
    "mate_distance",
]
