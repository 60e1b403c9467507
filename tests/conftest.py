"""Shared pytest fixtures and test helpers for extrakit tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep EXTRAKIT_* variables from the outer shell out of tests."""
    for name in ("EXTRAKIT_CONFIG", "EXTRAKIT_EXTRAS", "EXTRAKIT_VERBOSE", "EXTRAKIT_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_pyproject(tmp_path: Path) -> Callable[[str], Path]:
    """Write a pyproject.toml into the temporary project root."""

    def _write(content: str) -> Path:
        path = tmp_path / "pyproject.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
