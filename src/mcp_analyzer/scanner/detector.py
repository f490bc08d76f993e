"""Project scanner -- build ProjectStats for a directory tree.

The walk itself is synchronous; it runs in a worker thread so the event loop
serving MCP requests is never blocked. The worker is the only writer to the
ProjectStats it fills.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from mcp_analyzer.errors import ScanError
from mcp_analyzer.models import ProjectStats
from mcp_analyzer.scanner.limits import DEFAULT_LIMITS, ScanLimits
from mcp_analyzer.scanner.walker import walk

logger = logging.getLogger(__name__)


async def scan_project(
    path: str | Path,
    *,
    limits: ScanLimits | None = None,
) -> ProjectStats:
    """Scan a project directory and return its statistics.

    Args:
        path: Absolute or relative path to the project root.
        limits: Scan budget. Defaults to depth 10 / 10,000 files.

    Returns:
        A finalized ProjectStats (features deduplicated).

    Raises:
        ScanError: If the path is not a directory or traversal fails for a
            reason other than a permission error.
    """
    root = Path(path).expanduser().resolve()
    if not root.is_dir():
        raise ScanError(f"Cannot scan '{root}': path does not exist or is not a directory.")

    stats = ProjectStats()
    try:
        files_seen = await asyncio.to_thread(walk, root, stats, limits or DEFAULT_LIMITS)
    except OSError as exc:
        raise ScanError(f"Failed to scan '{root}': {exc}") from exc

    logger.info("Scanned %s: %d files, languages=%s", root, files_seen, stats.languages)
    return stats.finalize()


class DefaultProjectScanner:
    """Adapter for ProjectScannerPort."""

    async def scan_project(
        self,
        path: str | Path,
        *,
        limits: ScanLimits | None = None,
    ) -> ProjectStats:
        return await scan_project(path, limits=limits)
