#!/usr/bin/env python3

from .config import SearchConfig, SearchKind, configure
from .errors import FindUpError, PathResolutionError
from .finder import find_nearest, find_up, find_up_multi, show_matches
from .utils import iter_ancestors

__version__ = "0.1.0"
__all__ = [
    "FindUpError",
    "PathResolutionError",
    "SearchConfig",
    "SearchKind",
    "configure",
    "find_nearest",
    "find_up",
    "find_up_multi",
    "iter_ancestors",
    "show_matches",
]
