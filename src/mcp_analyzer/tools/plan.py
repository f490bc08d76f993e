"""plan_project tool -- turn a free-text description into a configured project skeleton."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from mcp.server.fastmcp import Context

from mcp_analyzer.config.synthesizer import synthesize_config, synthesize_rules
from mcp_analyzer.config.writer import awrite_project_configs
from mcp_analyzer.errors import ConfigWriteError, McpAnalyzerError
from mcp_analyzer.scanner.classifier import analyze_tech_stack
from mcp_analyzer.tools._helpers import get_context, require_text
from mcp_analyzer.tools._report import format_plan_report
from mcp_analyzer.tools.starter import generate_starter_files

if TYPE_CHECKING:
    from mcp_analyzer.server import AppContext

logger = logging.getLogger(__name__)


async def plan_project(
    ctx: Context,
    project_description: str,
    project_path: str,
) -> dict[str, object]:
    """Plan a new project from a description and set up MCP tools, rules and starter files.

    The description is matched against known languages, frameworks and
    feature keywords (e.g. "A FastAPI backend with PostgreSQL and JWT auth").
    The project directory is created if needed, then .cursor/mcp.json,
    .cursor/rules/project_rules.json and language starter files
    (package.json, tsconfig.json, src/index.ts or requirements.txt, main.py)
    are written. Existing starter files are left alone.

    Args:
        project_description: Free-text description of the project to build.
        project_path: Directory where the project should be created.

    Returns:
        Dict with: stack (languages, frameworks, features), tools, rules,
        files, starter_files, and a markdown report.
    """
    try:
        app = get_context(ctx)
        return await run_plan(app, project_description, project_path)
    except McpAnalyzerError as exc:
        return {"success": False, "error": f"Error planning project: {exc}"}
    except Exception as exc:
        await ctx.error(f"Unexpected error in plan_project: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}


async def run_plan(
    app: AppContext,
    project_description: str,
    project_path: str,
) -> dict[str, object]:
    """Classify *project_description* and lay out the project at *project_path*.

    Raises:
        McpAnalyzerError: On invalid input or a failed write.
    """
    description = require_text(project_description, "project_description")
    root = Path(require_text(project_path, "project_path")).expanduser().resolve()

    stack = analyze_tech_stack(description)
    config = await synthesize_config(stack, app.tool_discovery)
    rules = await synthesize_rules(stack, app.rule_discovery)

    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigWriteError(f"Cannot create project directory {root}: {exc}") from exc

    written = await awrite_project_configs(root, config, rules)
    starter_files = await asyncio.to_thread(generate_starter_files, root, stack)
    written.extend(root / relative for relative in starter_files)

    tool_names = list(config["mcpServers"])
    logger.info("Planned %s: languages=%s, tools=%s", root, stack.languages, tool_names)

    return {
        "success": True,
        "project_path": str(root),
        "stack": {
            "languages": list(stack.languages),
            "frameworks": list(stack.frameworks),
            "features": list(stack.features),
        },
        "tools": tool_names,
        "rules": [rule.name for rule in rules],
        "files": [str(path) for path in written],
        "starter_files": starter_files,
        "report": format_plan_report(stack, tool_names, written, root),
    }
