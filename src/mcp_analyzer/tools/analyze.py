"""analyze_project tool -- fingerprint an existing project and configure Cursor."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from mcp.server.fastmcp import Context

from mcp_analyzer.config.synthesizer import synthesize_config, synthesize_rules
from mcp_analyzer.config.writer import awrite_project_configs
from mcp_analyzer.errors import McpAnalyzerError
from mcp_analyzer.tools._helpers import get_context, require_text
from mcp_analyzer.tools._report import format_analysis_report

if TYPE_CHECKING:
    from mcp_analyzer.server import AppContext

logger = logging.getLogger(__name__)


async def analyze_project(ctx: Context, project_path: str) -> dict[str, object]:
    """Analyze an existing project and generate MCP tool and rule configs for Cursor.

    Walks the project tree (skipping node_modules, .git, build output, etc.),
    reads manifests such as package.json, requirements.txt, pom.xml and
    Gemfile, and infers languages, frameworks and features. Matching MCP
    servers are then written to .cursor/mcp.json and coding rules to
    .cursor/rules/project_rules.json inside the project.

    Existing files at those two paths are replaced.

    Args:
        project_path: Path to the project directory to analyze.

    Returns:
        Dict with: stats (file_types, languages, frameworks, dependencies,
        features), tools, rules, files, and a markdown report.
    """
    try:
        app = get_context(ctx)
        return await run_analysis(app, project_path)
    except McpAnalyzerError as exc:
        return {"success": False, "error": f"Error analyzing project: {exc}"}
    except Exception as exc:
        await ctx.error(f"Unexpected error in analyze_project: {exc}")
        return {"success": False, "error": f"Internal error: {type(exc).__name__}"}


async def run_analysis(app: AppContext, project_path: str) -> dict[str, object]:
    """Scan *project_path*, synthesize configs and write them into the project.

    Raises:
        McpAnalyzerError: On invalid input, an unscannable path or a failed write.
    """
    root = Path(require_text(project_path, "project_path")).expanduser().resolve()

    stats = await app.scanner.scan_project(root, limits=app.scan_limits)
    stack = stats.as_stack()

    config = await synthesize_config(stack, app.tool_discovery)
    rules = await synthesize_rules(stack, app.rule_discovery)
    written = await awrite_project_configs(root, config, rules)

    tool_names = list(config["mcpServers"])
    logger.info("Analyzed %s: %d tools, %d rules", root, len(tool_names), len(rules))

    return {
        "success": True,
        "project_path": str(root),
        "stats": stats.to_dict(),
        "tools": tool_names,
        "rules": [rule.name for rule in rules],
        "files": [str(path) for path in written],
        "report": format_analysis_report(stats, tool_names, written, root),
    }
