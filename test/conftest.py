from __future__ import annotations
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment and working directory out of every test."""
    for var in ("FINDUP_CWD", "FINDUP_KIND", "FINDUP_CASE_SENSITIVE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """
    A tree shaped like

        a/pkg.json
        a/b/pkg.json
        a/b/c/
    """
    base = tmp_path.resolve()
    (base / "a" / "b" / "c").mkdir(parents=True)
    (base / "a" / "pkg.json").write_text("{}")
    (base / "a" / "b" / "pkg.json").write_text("{}")
    return base


@pytest.fixture
def start(root: Path) -> Path:
    return root / "a" / "b" / "c"
