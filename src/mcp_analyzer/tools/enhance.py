"""enhance_project tool -- add MCP tools for new requirements to an existing project."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from mcp.server.fastmcp import Context

from mcp_analyzer.config.reader import aread_config
from mcp_analyzer.config.synthesizer import added_tools, enhance_config
from mcp_analyzer.config.writer import mcp_config_path, write_json
from mcp_analyzer.errors import ConfigReadError, McpAnalyzerError
from mcp_analyzer.models import TechnologyStack
from mcp_analyzer.scanner.classifier import analyze_tech_stack
from mcp_analyzer.tools._helpers import get_context, require_text
from mcp_analyzer.tools._report import format_enhancement_report

if TYPE_CHECKING:
    from mcp_analyzer.server import AppContext

logger = logging.getLogger(__name__)


async def enhance_project(
    ctx: Context,
    project_path: str,
    new_requirements: str,
) -> dict[str, object]:
    """Enhance an existing project's MCP setup for new requirements.

    Scans the project for its current stack, classifies the new requirements
    (e.g. "add real-time chat and S3 file uploads"), and adds any newly
    relevant MCP servers to .cursor/mcp.json. Servers already configured are
    never modified or removed.

    Args:
        project_path: Path to the existing project directory.
        new_requirements: Free-text description of the features to add.

    Returns:
        Dict with: stack (combined), new_features, added_tools, files, and
        a markdown report.
    """
    try:
        app = get_context(ctx)
        return await run_enhancement(app, project_path, new_requirements)
    except McpAnalyzerError as exc:
        return {"success": False, "error": f"Error enhancing project: {exc}"}
    except Exception as exc:
        await ctx.error(f"Unexpected error in enhance_project: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}


async def run_enhancement(
    app: AppContext,
    project_path: str,
    new_requirements: str,
) -> dict[str, object]:
    """Merge tools for *new_requirements* into the project's existing mcp.json.

    Raises:
        McpAnalyzerError: On invalid input, an unscannable path or a failed write.
    """
    root = Path(require_text(project_path, "project_path")).expanduser().resolve()
    requirements = require_text(new_requirements, "new_requirements")

    stats = await app.scanner.scan_project(root, limits=app.scan_limits)
    requested = analyze_tech_stack(requirements)
    combined = combine_stacks(stats.as_stack(), requested)

    config_path = mcp_config_path(root)
    existing = await _load_existing(config_path)
    updated = await enhance_config(existing, combined, app.tool_discovery)

    await asyncio.to_thread(write_json, config_path, updated)

    new_names = added_tools(existing, updated)
    added = [name for name in updated["mcpServers"] if name in new_names]
    logger.info("Enhanced %s: added %s", root, added or "nothing")

    return {
        "success": True,
        "project_path": str(root),
        "stack": {
            "languages": list(combined.languages),
            "frameworks": list(combined.frameworks),
            "features": list(combined.features),
        },
        "new_features": list(requested.features),
        "added_tools": added,
        "files": [str(config_path)],
        "report": format_enhancement_report(requested, added, [config_path], root),
    }


def combine_stacks(existing: TechnologyStack, requested: TechnologyStack) -> TechnologyStack:
    """Union of languages and frameworks; features come from *requested* only."""
    merged = existing.union(requested)
    return TechnologyStack(
        languages=merged.languages,
        frameworks=merged.frameworks,
        features=list(requested.features),
    )


async def _load_existing(config_path: Path) -> dict[str, object]:
    try:
        return await aread_config(config_path)
    except ConfigReadError as exc:
        logger.warning("Ignoring unreadable config, starting fresh: %s", exc)
        return {"mcpServers": {}}
