"""Exception hierarchy for mcp-analyzer.

All exceptions inherit from McpAnalyzerError (single catch point).
Messages are written for LLM consumption -- clear, actionable, no stack traces.
"""

from __future__ import annotations


class McpAnalyzerError(Exception):
    """Base exception for all mcp-analyzer errors."""


class InvalidInputError(McpAnalyzerError):
    """A required argument is missing or blank."""


class ScanError(McpAnalyzerError):
    """Error scanning a project directory."""


class DiscoveryError(McpAnalyzerError):
    """Error querying the MCP server or rule discovery sources."""


class ConfigReadError(McpAnalyzerError):
    """Error reading an existing MCP config file."""


class ConfigWriteError(McpAnalyzerError):
    """Error writing a generated config file."""
