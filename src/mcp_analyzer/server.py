"""MCP server that analyzes projects and configures Cursor's MCP tools and rules."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from mcp_analyzer.discovery.base import RuleDiscoveryPort, ToolDiscoveryPort
from mcp_analyzer.discovery.rules import CursorDirectoryRuleDiscovery
from mcp_analyzer.discovery.servers import GitHubToolDiscovery
from mcp_analyzer.scanner.base import ProjectScannerPort
from mcp_analyzer.scanner.detector import DefaultProjectScanner
from mcp_analyzer.scanner.limits import ScanLimits
from mcp_analyzer.tools.analyze import analyze_project
from mcp_analyzer.tools.enhance import enhance_project
from mcp_analyzer.tools.plan import plan_project


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations.

    Discovery and scanning adapters are injected here. Config reading and
    writing stay as direct module imports.
    """

    http_client: httpx.AsyncClient
    tool_discovery: ToolDiscoveryPort
    rule_discovery: RuleDiscoveryPort
    scanner: ProjectScannerPort
    scan_limits: ScanLimits


@asynccontextmanager
async def open_app_context() -> AsyncIterator[AppContext]:
    """Build the adapters around one shared HTTP client."""
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(30.0, connect=10.0),
        follow_redirects=True,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
        transport=httpx.AsyncHTTPTransport(retries=3),
    ) as http_client:
        yield AppContext(
            http_client=http_client,
            tool_discovery=GitHubToolDiscovery(http_client),
            rule_discovery=CursorDirectoryRuleDiscovery(http_client),
            scanner=DefaultProjectScanner(),
            scan_limits=ScanLimits.from_env(),
        )


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage shared adapter lifecycle -- the composition root."""
    async with open_app_context() as app:
        yield app


mcp = FastMCP(
    "mcp-analyzer",
    instructions=(
        "mcp-analyzer sets up Cursor's MCP tools and coding rules for a project.\n\n"
        "## When to use mcp-analyzer\n\n"
        "- The user has an existing codebase and wants MCP tools configured for it: "
        "call **analyze_project** with the project path.\n"
        "- The user describes a project they want to build: call **plan_project** "
        "with the description and the directory to create it in.\n"
        "- The user wants to add features to a project that is already set up: "
        "call **enhance_project** with the path and the new requirements.\n\n"
        "## What gets written\n"
        "- `.cursor/mcp.json` with one entry per MCP server.\n"
        "- `.cursor/rules/project_rules.json` with coding rules "
        "(analyze_project and plan_project only).\n"
        "- Starter files such as package.json or main.py (plan_project only, "
        "never overwriting existing files).\n\n"
        "enhance_project only adds servers; entries already in mcp.json are kept as-is.\n\n"
        "After any of these, remind the user to replace YOUR_API_KEY_HERE placeholders "
        "with real keys and restart Cursor."
    ),
    lifespan=app_lifespan,
)

# ─── Config-writing tools ─────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(analyze_project)
mcp.tool(annotations=ToolAnnotations(destructiveHint=True))(plan_project)
mcp.tool(annotations=ToolAnnotations(destructiveHint=False))(enhance_project)
