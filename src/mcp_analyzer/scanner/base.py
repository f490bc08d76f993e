"""Port: Project technology scanning."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from mcp_analyzer.models import ProjectStats
from mcp_analyzer.scanner.limits import ScanLimits


class ProjectScannerPort(Protocol):
    """Port for building ProjectStats from a project directory."""

    async def scan_project(
        self,
        path: str | Path,
        *,
        limits: ScanLimits | None = None,
    ) -> ProjectStats:
        """Scan a project directory and return its ProjectStats."""
        ...
