"""Discover MCP servers from the reference servers repository on GitHub.

Source: https://github.com/modelcontextprotocol/servers
Every directory under ``src/`` is one server, published on npm as
``@modelcontextprotocol/server-<directory>``.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
from dataclasses import dataclass

import httpx

from mcp_analyzer.errors import DiscoveryError
from mcp_analyzer.models import ToolDescriptor

logger = logging.getLogger(__name__)

_OWNER_REPO = "modelcontextprotocol/servers"
_BRANCH = "main"
_API_BASE = "https://api.github.com"
_RAW_BASE = "https://raw.githubusercontent.com"

ESSENTIAL_SERVERS: tuple[str, ...] = ("brave-search", "sequential-thinking")

_API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"

# First paragraph after the top-level heading.
_DESCRIPTION_RE = re.compile(r"# .+?\n\n(.+?)(?:\n\n|$)", re.DOTALL)


def _server_descriptor(name: str, description: str = "") -> ToolDescriptor:
    """Build the npx descriptor for a reference server directory."""
    env = {"BRAVE_API_KEY": _API_KEY_PLACEHOLDER} if name == "brave-search" else {}
    return ToolDescriptor(
        name=name,
        install_command="npx",
        install_args=["-y", f"@modelcontextprotocol/server-{name}"],
        env=env,
        description=description or f"MCP server for {name}",
        repository=f"https://github.com/{_OWNER_REPO}/tree/{_BRANCH}/src/{name}",
    )


FALLBACK_TOOLS: dict[str, ToolDescriptor] = {
    "brave-search": _server_descriptor(
        "brave-search", "Enables web searches using the Brave Search API"
    ),
    "sequential-thinking": _server_descriptor(
        "sequential-thinking", "Enables step-by-step reasoning for complex problems"
    ),
}


def fallback_tools() -> dict[str, ToolDescriptor]:
    """The built-in baseline used when discovery is unavailable."""
    return dict(FALLBACK_TOOLS)


@dataclass
class GitHubToolDiscovery:
    """Async adapter for ToolDiscoveryPort backed by the GitHub contents API."""

    http: httpx.AsyncClient
    servers_path: str = "src"

    async def discover_tools(self, technologies: list[str]) -> dict[str, ToolDescriptor]:
        """Find reference servers whose README mentions any of *technologies*.

        Essential servers are always kept; when their README cannot be
        fetched the built-in descriptor from FALLBACK_TOOLS stands in. With
        no technologies, only the essential servers are returned.

        Raises:
            DiscoveryError: If the server listing cannot be fetched or parsed.
        """
        if technologies:
            names = await self._list_server_dirs()
        else:
            names = list(ESSENTIAL_SERVERS)

        results = await asyncio.gather(
            *(self._describe(name, technologies) for name in names),
            return_exceptions=True,
        )

        servers: dict[str, ToolDescriptor] = {}
        for name, result in zip(names, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning("Error processing server directory %s: %s", name, result)
                if name in FALLBACK_TOOLS:
                    servers[name] = FALLBACK_TOOLS[name]
                continue
            if result is not None:
                servers[name] = result
        return servers

    async def _list_server_dirs(self) -> list[str]:
        url = f"{_API_BASE}/repos/{_OWNER_REPO}/contents/{self.servers_path}"
        try:
            response = await self.http.get(url, headers=_github_headers())
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise DiscoveryError(f"Failed to list MCP servers from GitHub: {exc}") from exc
        except ValueError as exc:
            raise DiscoveryError(f"GitHub returned invalid JSON for {url}: {exc}") from exc

        if not isinstance(data, list):
            raise DiscoveryError("Unexpected GitHub API response format: expected a list.")

        return [
            str(item["name"])
            for item in data
            if isinstance(item, dict)
            and item.get("type") == "dir"
            and not str(item.get("name", ".")).startswith(".")
        ]

    async def _describe(self, name: str, technologies: list[str]) -> ToolDescriptor | None:
        """Fetch a server's README and keep it if relevant or essential."""
        readme = await self._fetch_readme(name)

        description = ""
        score = 0
        if readme is not None:
            match = _DESCRIPTION_RE.search(readme)
            if match:
                description = match.group(1).strip()
            score = relevance_score(readme, technologies)

        if score > 0 or name in ESSENTIAL_SERVERS or not technologies:
            return _server_descriptor(name, description)
        return None

    async def _fetch_readme(self, name: str) -> str | None:
        url = f"{_RAW_BASE}/{_OWNER_REPO}/{_BRANCH}/{self.servers_path}/{name}/README.md"
        response = await self.http.get(url)
        if response.status_code >= 500:
            raise DiscoveryError(f"GitHub returned HTTP {response.status_code} for {url}")
        if response.status_code != 200:
            return None
        return response.text


def relevance_score(readme: str, technologies: list[str]) -> int:
    """Count how many technologies are mentioned in *readme* (case-insensitive)."""
    return sum(
        1 for tech in technologies if re.search(re.escape(tech), readme, re.IGNORECASE)
    )


def _github_headers() -> dict[str, str]:
    headers = {"Accept": "application/vnd.github+json"}
    token = os.environ.get("GITHUB_TOKEN", "").strip()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers
