#!/usr/bin/env python3

from __future__ import annotations
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from .errors import PathResolutionError

logger = logging.getLogger(__name__)


def resolve_start(start: str | os.PathLike) -> Path:
    """Resolve `start` to an absolute, canonical, existing directory."""
    path = Path(start).expanduser()
    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError:
        raise PathResolutionError(start, "no such directory") from None
    except (OSError, RuntimeError) as exc:
        # RuntimeError is what older interpreters raise for symlink loops
        raise PathResolutionError(start, str(exc)) from exc

    if not resolved.is_dir():
        raise PathResolutionError(start, "not a directory")
    return resolved


def iter_ancestors(start: str | os.PathLike) -> Iterator[Path]:
    """
    Yield `start` (resolved) followed by each of its parents, ending with the filesystem root.

    Resolution happens eagerly, so a bad `start` raises here rather than on first iteration.
    Everything after that is pure path arithmetic; the ancestors don't need to be readable.
    """
    return ancestors_of(resolve_start(start))


def ancestors_of(cur: Path) -> Iterator[Path]:
    """Yield `cur` and its parents up to the root, without touching the filesystem."""
    while True:
        yield cur
        if cur == cur.parent:
            return  # Root is its own parent
        cur = cur.parent


def probe(path: Path) -> os.stat_result | None:
    """
    Stat `path`, following symlinks.

    Returns None when there is nothing there. Unreadable paths (permissions, I/O errors,
    symlink loops) are logged and also reported as None so callers can keep going.
    """
    try:
        return path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        logger.debug("Skipping unreadable path %s: %s", path, exc)
        return None


def _match_casefold(directory: Path, part: str) -> Path | None:
    try:
        for entry in sorted(directory.iterdir()):
            if entry.name.lower() == part.lower():
                return entry
    except OSError as exc:
        logger.debug("Cannot list %s: %s", directory, exc)
    return None


def find_in(
    root: Path, needle: str | Path, case_sensitive=True
) -> tuple[Path, os.stat_result] | None:
    """
    Look for `needle` inside `root`, returning the path found and its stat result.

    With `case_sensitive=False`, enables finding subpaths case-insensitively on
    case-sensitive platforms; the returned path carries the on-disk casing.
    """
    exact = root / needle
    found = probe(exact)
    if found is not None:
        return exact, found  # If it exists, we found it exactly.
    if case_sensitive:
        return None  # Otherwise, there is no case sensitive match.

    cur = root
    for part in Path(needle).parts:
        if probe(cur / part) is not None:
            cur = cur / part
            continue
        alternate = _match_casefold(cur, part)
        if alternate is None:
            return None  # No case insensitive match for the current part either
        cur = alternate

    found = probe(cur)
    return (cur, found) if found is not None else None
