"""Command-line interface: run analyze/plan/enhance directly or serve over stdio."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable

from mcp_analyzer import __version__
from mcp_analyzer.errors import McpAnalyzerError
from mcp_analyzer.server import AppContext, mcp, open_app_context
from mcp_analyzer.tools.analyze import run_analysis
from mcp_analyzer.tools.enhance import run_enhancement
from mcp_analyzer.tools.plan import run_plan

Operation = Callable[[AppContext], Awaitable[dict[str, object]]]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mcp-analyzer",
        description="Analyze a project and configure Cursor's MCP tools and coding rules.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON instead of the markdown report.",
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    analyze = commands.add_parser("analyze", help="Analyze an existing project.")
    analyze.add_argument("path", help="Project directory to analyze.")

    plan = commands.add_parser("plan", help="Plan a new project from a description.")
    plan.add_argument("description", help="Free-text description of the project.")
    plan.add_argument("path", help="Directory to create the project in.")

    enhance = commands.add_parser("enhance", help="Add MCP tools for new requirements.")
    enhance.add_argument("path", help="Existing project directory.")
    enhance.add_argument("requirements", help="Free-text description of the new features.")

    commands.add_parser("serve", help="Run the MCP server over stdio.")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
    return args


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _operation(args: argparse.Namespace) -> Operation:
    if args.command == "analyze":
        return lambda app: run_analysis(app, args.path)
    if args.command == "plan":
        return lambda app: run_plan(app, args.description, args.path)
    return lambda app: run_enhancement(app, args.path, args.requirements)


async def _run(operation: Operation) -> dict[str, object]:
    async with open_app_context() as app:
        try:
            return await operation(app)
        except McpAnalyzerError as exc:
            return {"success": False, "error": str(exc)}


def run_cli(argv: list[str] | None = None) -> int:
    """CLI runner. Returns the process exit status."""
    args = _parse_args(argv)
    if args.command is None:
        return 0

    _configure_logging(args.verbose)

    if args.command == "serve":
        mcp.run(transport="stdio")
        return 0

    result = asyncio.run(_run(_operation(args)))

    if not result.get("success"):
        print(f"Error: {result.get('error', 'unknown error')}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print(result["report"])
    return 0


if __name__ == "__main__":
    raise SystemExit(run_cli())
