"""Turn a technology stack into an MCP config and a rule list.

Invariants:
  1. Fresh synthesis maps every discovered tool into the config verbatim.
  2. Enhancement never modifies or removes an entry already in the config.
  3. Discovery failure never fails the operation: fresh synthesis falls back
     to the built-in baseline tools, enhancement returns the existing config.
"""

from __future__ import annotations

import copy
import logging

import httpx

from mcp_analyzer.config.reader import server_names
from mcp_analyzer.discovery.base import RuleDiscoveryPort, ToolDiscoveryPort
from mcp_analyzer.discovery.rules import default_rules
from mcp_analyzer.discovery.servers import fallback_tools
from mcp_analyzer.errors import DiscoveryError
from mcp_analyzer.models import RuleDescriptor, TechnologyStack, ToolDescriptor

logger = logging.getLogger(__name__)

_DISCOVERY_ERRORS = (DiscoveryError, httpx.HTTPError)


def technology_keywords(stack: TechnologyStack) -> list[str]:
    """Languages, frameworks and lowercased features, deduplicated in order."""
    keywords = [
        *stack.languages,
        *stack.frameworks,
        *(feature.lower() for feature in stack.features),
    ]
    return list(dict.fromkeys(keywords))


async def synthesize_config(
    stack: TechnologyStack,
    discovery: ToolDiscoveryPort,
) -> dict[str, object]:
    """Build a fresh ``{"mcpServers": {...}}`` config for *stack*."""
    try:
        tools = await discovery.discover_tools(technology_keywords(stack))
    except _DISCOVERY_ERRORS as exc:
        logger.warning("Tool discovery failed, using baseline tools: %s", exc)
        tools = fallback_tools()

    return {"mcpServers": _entries(tools)}


async def enhance_config(
    existing: dict[str, object],
    stack: TechnologyStack,
    discovery: ToolDiscoveryPort,
) -> dict[str, object]:
    """Return a copy of *existing* with newly discovered tools added.

    Tools whose name is already configured are left untouched.
    """
    config = copy.deepcopy(existing)
    servers = config.get("mcpServers")
    if not isinstance(servers, dict):
        servers = {}
        config["mcpServers"] = servers

    try:
        tools = await discovery.discover_tools(technology_keywords(stack))
    except _DISCOVERY_ERRORS as exc:
        logger.warning("Tool discovery failed, keeping existing config: %s", exc)
        return config

    for name, entry in _entries(tools).items():
        if name not in servers:
            servers[name] = entry
    return config


def added_tools(old: dict[str, object], new: dict[str, object]) -> set[str]:
    """Tool names configured in *new* but not in *old*."""
    return server_names(new) - server_names(old)


async def synthesize_rules(
    stack: TechnologyStack,
    discovery: RuleDiscoveryPort,
) -> list[RuleDescriptor]:
    """Discover rules for the stack's languages and frameworks, unique by name."""
    technologies = list(dict.fromkeys([*stack.languages, *stack.frameworks]))
    try:
        rules = await discovery.discover_rules(technologies)
    except _DISCOVERY_ERRORS as exc:
        logger.warning("Rule discovery failed, using default rules: %s", exc)
        rules = []

    unique: dict[str, RuleDescriptor] = {}
    for rule in rules:
        unique.setdefault(rule.name, rule)
    return list(unique.values()) or default_rules(technologies)


def _entries(tools: dict[str, ToolDescriptor]) -> dict[str, dict[str, object]]:
    return {name: tool.to_server_config().to_dict() for name, tool in tools.items()}
