"""Shared test fixtures."""

from __future__ import annotations

import pytest

_ENV_VARS = ("MCP_ANALYZER_MAX_DEPTH", "MCP_ANALYZER_MAX_FILES", "GITHUB_TOKEN")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset variables that change scan limits or discovery headers."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
