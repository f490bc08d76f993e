"""Ports: MCP server and rule discovery."""

from __future__ import annotations

from typing import Protocol

from mcp_analyzer.models import RuleDescriptor, ToolDescriptor


class ToolDiscoveryPort(Protocol):
    """Port for finding MCP servers relevant to a set of technologies."""

    async def discover_tools(self, technologies: list[str]) -> dict[str, ToolDescriptor]:
        """Return tool name -> descriptor. An empty list means "essentials only".

        Raises:
            DiscoveryError: If the discovery source cannot be queried.
        """
        ...


class RuleDiscoveryPort(Protocol):
    """Port for finding coding rules relevant to a set of technologies."""

    async def discover_rules(self, technologies: list[str]) -> list[RuleDescriptor]:
        """Return rules in insertion order; never empty."""
        ...
