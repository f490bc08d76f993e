"""Bounds applied to a single project scan."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)

MAX_SCAN_DEPTH = 10
MAX_FILES = 10000

IGNORED_DIRECTORIES: frozenset[str] = frozenset(
    {
        "node_modules",
        ".git",
        "venv",
        "__pycache__",
        ".next",
        "dist",
        "build",
        ".vscode",
        ".idea",
    }
)


@dataclass(frozen=True, slots=True)
class ScanLimits:
    """Depth and file-count budget plus the directories the walker skips.

    ``max_files`` is a soft cap: it is checked when a directory is entered,
    so the last directory listed may push the total slightly past it.
    """

    max_depth: int = MAX_SCAN_DEPTH
    max_files: int = MAX_FILES
    ignored_directories: frozenset[str] = IGNORED_DIRECTORIES

    @classmethod
    def from_env(cls) -> ScanLimits:
        """Build limits from MCP_ANALYZER_MAX_DEPTH / MCP_ANALYZER_MAX_FILES."""
        limits = cls()
        depth = _int_from_env("MCP_ANALYZER_MAX_DEPTH")
        if depth is not None:
            limits = replace(limits, max_depth=depth)
        files = _int_from_env("MCP_ANALYZER_MAX_FILES")
        if files is not None:
            limits = replace(limits, max_files=files)
        return limits


DEFAULT_LIMITS = ScanLimits()


def _int_from_env(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return None
    if value < 0:
        logger.warning("Ignoring %s=%r: must be non-negative", name, raw)
        return None
    return value
