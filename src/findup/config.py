#!/usr/bin/env python3

from __future__ import annotations
import os
import stat
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict
from rich.tree import Tree
import rich

from .sources import AncestorTomlConfigSettingsSource
from .utils import resolve_start

# ------------------------------------------------------------------------------
# Search Kind
# ------------------------------------------------------------------------------

KIND_ALIASES = {
    "directory": "dir",
    "any": "either",
}


class SearchKind(str, Enum):
    """Which kind of filesystem entry counts as a match."""

    FILE = "file"
    DIR = "dir"
    EITHER = "either"

    @classmethod
    def _missing_(cls, value: object) -> SearchKind | None:
        if not isinstance(value, str):
            return None
        value = value.strip().lower()
        value = KIND_ALIASES.get(value, value)
        for member in cls:
            if member.value == value:
                return member
        return None

    def matches(self, mode: int) -> bool:
        """Check a `st_mode` against this kind. Symlinks are expected to be followed already."""
        if self is SearchKind.FILE:
            return stat.S_ISREG(mode)
        if self is SearchKind.DIR:
            return stat.S_ISDIR(mode)
        return True


# ------------------------------------------------------------------------------
# Search Config
# ------------------------------------------------------------------------------


class SearchConfig(BaseSettings):
    """
    Where to start searching and what to accept.

    Values are taken from keyword arguments, then `FINDUP_*` environment variables,
    then the nearest `.findup.toml`, then the defaults below. Immutable once built.
    """

    model_config = SettingsConfigDict(
        env_prefix="findup_",
        toml_file=".findup.toml",
        extra="ignore",
        frozen=True,
    )

    cwd: Path = Field(default_factory=Path.cwd, validate_default=True)
    kind: SearchKind = SearchKind.FILE
    case_sensitive: bool = True

    @field_validator("cwd")
    @classmethod
    def _resolve_cwd(cls, value: Path) -> Path:
        # Raises PathResolutionError, which pydantic passes through unwrapped
        return resolve_start(value)

    @field_validator("kind", mode="before")
    @classmethod
    def _parse_kind(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, SearchKind):
            return SearchKind(value)
        return value

    def explain(self):
        tree = Tree(self.__class__.__name__)
        for field_name in self.__class__.model_fields:
            tree.add(f"{field_name} = [bold]{getattr(self, field_name)}[/]")
        rich.print(tree)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            AncestorTomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure(
    start_directory: str | os.PathLike | None = None,
    kind: SearchKind | str | None = None,
    **overrides: Any,
) -> SearchConfig:
    """
    Build a validated SearchConfig.

    Anything left as None falls through to the environment, `.findup.toml` or the defaults
    (the working directory, and SearchKind.FILE). Raises PathResolutionError when the
    start directory doesn't exist or isn't a directory.
    """
    if start_directory is not None:
        overrides["cwd"] = start_directory
    if kind is not None:
        overrides["kind"] = kind
    return SearchConfig(**overrides)
