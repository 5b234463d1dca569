#!/usr/bin/env python3


import logging
from findup import SearchKind, configure, find_nearest, find_up_multi, show_matches

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s %(message)s")


# ------------------------------------------------------------------------------
# Example 1: Project markers
# ------------------------------------------------------------------------------

config = configure(".", SearchKind.FILE)
config.explain()

markers = find_up_multi(config, ["pyproject.toml", "package.json", ".node-version"])
show_matches(markers, title="Project markers")


# ------------------------------------------------------------------------------
# Example 2: Nearest repository root
# ------------------------------------------------------------------------------

git_dir = find_nearest(configure(kind="either"), ".git")
print(f"Repository root: {git_dir.parent if git_dir else 'not in a repository'}")
