"""Bounded recursive walk that fills a ProjectStats accumulator.

Traversal state (depth, files seen so far) is threaded through the recursion
and the updated file count is returned to the caller, so sibling directories
share one running budget.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from mcp_analyzer.models import ProjectStats
from mcp_analyzer.scanner.extractors import extract_manifest
from mcp_analyzer.scanner.limits import DEFAULT_LIMITS, ScanLimits
from mcp_analyzer.scanner.tables import LANGUAGE_EXTENSIONS

logger = logging.getLogger(__name__)


def walk(
    root: Path | str,
    stats: ProjectStats,
    limits: ScanLimits = DEFAULT_LIMITS,
    *,
    depth: int = 0,
    files_seen: int = 0,
) -> int:
    """Walk *root* recursively, updating *stats* in place.

    Args:
        root: Directory to walk.
        stats: Accumulator owned by the scan in progress.
        limits: Depth / file budget and ignore sets.
        depth: Depth of *root* relative to the scan root.
        files_seen: Regular files counted before entering *root*.

    Returns:
        The running file count after this subtree.

    Raises:
        OSError: For any listing failure other than a permission error.
    """
    if depth >= limits.max_depth or files_seen >= limits.max_files:
        return files_seen

    directory = Path(root)
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except PermissionError:
        logger.warning("Permission denied accessing %s", directory)
        return files_seen

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if entry.name in limits.ignored_directories:
                continue
            if entry.name == "workflows" and directory.name == ".github":
                stats.add_feature("CI/CD")
            files_seen = walk(
                entry.path,
                stats,
                limits,
                depth=depth + 1,
                files_seen=files_seen,
            )
        elif entry.is_file(follow_symlinks=False):
            files_seen += 1
            ext = file_extension(entry.name)
            if ext:
                stats.count_extension(ext)
                detect_language_from_extension(ext, stats)
            extract_manifest(Path(entry.path), stats)

    return files_seen


def file_extension(name: str) -> str:
    """Lowercased extension with its leading dot, or "" (dotfiles have none)."""
    return os.path.splitext(name)[1].lower()


def detect_language_from_extension(ext: str, stats: ProjectStats) -> None:
    """Record the language an extension implies, if any."""
    language = LANGUAGE_EXTENSIONS.get(ext)
    if language is not None:
        stats.add_language(language)
