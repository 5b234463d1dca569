#!/usr/bin/env python3

from __future__ import annotations
import logging
import os
import stat
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, TomlConfigSettingsSource
from pydantic_settings.sources import DEFAULT_PATH, PathType

from .errors import PathResolutionError
from .utils import find_in, iter_ancestors

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Config Source Mixins
# ------------------------------------------------------------------------------


def find_upwards(needle: Path, case_sensitive=True) -> Path | None:
    """
    Find the nearest ancestor of the working directory containing `needle` as a regular file.
    """
    # If absolute, there is nothing to search for
    if needle.is_absolute():
        return needle if needle.is_file() else None

    try:
        ancestors = iter_ancestors(Path.cwd())
    except (PathResolutionError, FileNotFoundError) as exc:
        logger.debug("Cannot search for %s from the working directory: %s", needle, exc)
        return None

    for directory in ancestors:
        found = find_in(directory, needle, case_sensitive)
        if found and stat.S_ISREG(found[1].st_mode):
            return found[0]
    return None


class AncestorConfigMixin:
    """Mixin for finding config files in ancestor directories."""

    def __init__(self, *args, case_sensitive: bool = True, **kwargs):
        self._case_sensitive = case_sensitive
        super().__init__(*args, **kwargs)

    def _read_files(self, files: PathType | None, *args, **kwargs) -> dict[str, Any]:
        """Read config files, searching upwards if not found directly."""
        if files is None:
            return {}
        if isinstance(files, (str, os.PathLike)):
            files = [files]

        vars: dict[str, Any] = {}
        for file in files:
            found_path = find_upwards(Path(file).expanduser(), self._case_sensitive)
            if found_path:
                logger.debug("Reading settings from %s", found_path)
                vars.update(self._rebase_cwd(self._read_file(found_path), found_path.parent))
        return vars

    @staticmethod
    def _rebase_cwd(values: dict[str, Any], base: Path) -> dict[str, Any]:
        """A relative `cwd` in a settings file is relative to the folder holding that file."""
        cwd = values.get("cwd")
        if isinstance(cwd, str):
            path = Path(cwd).expanduser()
            if not path.is_absolute():
                values = {**values, "cwd": str(base / path)}
        return values


# ------------------------------------------------------------------------------
# Ancestor TOML Config Settings Source
# ------------------------------------------------------------------------------


class AncestorTomlConfigSettingsSource(AncestorConfigMixin, TomlConfigSettingsSource):
    """
    Read SearchConfig defaults from the nearest `.findup.toml` in the working directory
    or one of its parents. A relative `cwd` in that file is taken relative to the file.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        toml_file: PathType | None = DEFAULT_PATH,
        *,
        case_sensitive=True,
    ):
        # The mixin keeps case_sensitive and forwards the rest to TomlConfigSettingsSource
        super().__init__(case_sensitive=case_sensitive, settings_cls=settings_cls, toml_file=toml_file)
