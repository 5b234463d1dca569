#!/usr/bin/env python3

from __future__ import annotations
import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from rich.markup import escape
from rich.tree import Tree
import rich

from .config import SearchConfig
from .utils import ancestors_of, find_in

logger = logging.getLogger(__name__)

_SEPARATORS = os.sep + (os.altsep or "")


# ------------------------------------------------------------------------------
# Matching
# ------------------------------------------------------------------------------


def _validate_names(names: Iterable[str]) -> list[str]:
    """Check each name and drop duplicates, keeping first-seen order."""
    unique: dict[str, None] = {}
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"Search names must be strings, got {type(name).__name__}")
        if not name:
            raise ValueError("Search names must not be empty")
        if "\0" in name:
            raise ValueError(f"Search name {name!r} contains a null byte")
        if os.path.isabs(name):
            raise ValueError(f"Search name '{name}' must be relative, not absolute")
        if name[-1] in _SEPARATORS or os.path.basename(name) == ".":
            # pathlib would drop the trailing part and match whatever precedes it
            raise ValueError(f"Search name '{name}' must end in an entry name, not a separator")
        unique.setdefault(name, None)
    return list(unique)


def find_up_multi(config: SearchConfig, names: Iterable[str]) -> dict[str, list[Path]]:
    """
    Find every occurrence of each of `names` in the configured directory and all its ancestors.

    The ancestors are walked once, checking every name at each level, and the walk always
    runs to the filesystem root. Each name maps to its matches nearest first; names that were
    never found map to an empty list. Levels that can't be read count as no match.

    Each (ancestor, name) pair costs one stat. With `case_sensitive=False` a miss also
    lists the directory and stats each path component, so that mode is slower.
    """
    if isinstance(names, str):
        names = [names]
    targets = _validate_names(names)
    paths: dict[str, list[Path]] = {name: [] for name in targets}
    if not targets:
        return paths

    # config.cwd was resolved when the config was built
    for directory in ancestors_of(config.cwd):
        for name in targets:
            found = find_in(directory, name, config.case_sensitive)
            if found is None:
                continue

            path, info = found
            if config.kind.matches(info.st_mode):
                paths[name].append(path)

    logger.debug(
        "Searched upward from %s for %s: %s",
        config.cwd,
        targets,
        {name: len(found) for name, found in paths.items()},
    )
    return paths


def find_up(config: SearchConfig, name: str) -> list[Path]:
    """
    Find every occurrence of `name` in the configured directory and all its ancestors.

    ```python
    config = configure(".", SearchKind.FILE)
    paths = find_up(config, "package.json")
    ```
    """
    return find_up_multi(config, [name])[name]


def find_nearest(config: SearchConfig, name: str) -> Path | None:
    """The closest match for `name`, if there is one."""
    found = find_up(config, name)
    return found[0] if found else None


# ------------------------------------------------------------------------------
# Display
# ------------------------------------------------------------------------------


def show_matches(
    matches: Mapping[str, Sequence[Path]] | Sequence[Path],
    title: str = "Matches",
    tree: Tree | None = None,
) -> Tree:
    """Pretty print search results, nearest match first."""
    is_root = tree is None
    if tree is None:
        tree = Tree(title)

    if not isinstance(matches, Mapping):
        for ix, path in enumerate(matches):
            style = "bold" if ix == 0 else "dim"
            tree.add(f"[{style}]{escape(str(path))}[/]")
    else:
        for name, paths in matches.items():
            if not paths:
                tree.add(f"[dim]{escape(name)} (not found)[/]")
                continue
            subtree = tree.add(escape(name))
            show_matches(paths, title, subtree)

    if is_root:
        rich.print(tree)
    return tree
