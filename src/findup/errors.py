#!/usr/bin/env python3

from __future__ import annotations
from pathlib import Path


class FindUpError(Exception):
    """Base class for errors raised by findup."""


class PathResolutionError(FindUpError, OSError):
    """
    Raised when a starting directory can't be resolved to an existing absolute directory.

    Not a ValueError, so pydantic validators re-raise it as-is.
    """

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot resolve start directory '{path}': {reason}")
