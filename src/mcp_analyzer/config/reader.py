"""Read MCP config files with schema tolerance.

All config files follow: { "mcpServers": { "<name>": { ... } } }
We read only "mcpServers", preserve everything else on write.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from mcp_analyzer.errors import ConfigReadError


def read_config(config_path: Path | str) -> dict[str, object]:
    """Read a full MCP config file.

    Returns the raw dict so the writer can round-trip unknown keys.
    Returns an empty {"mcpServers": {}} if the file doesn't exist or is blank.
    """
    path = Path(config_path)
    if not path.exists():
        return {"mcpServers": {}}

    try:
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return {"mcpServers": {}}
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigReadError(
            f"Invalid JSON in {path}: {exc}. Fix the JSON syntax or delete the file to start fresh."
        ) from exc
    except PermissionError as exc:
        raise ConfigReadError(f"Permission denied reading {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigReadError(f"Failed to read {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigReadError(f"Expected a JSON object in {path}, got {type(data).__name__}.")
    if not isinstance(data.get("mcpServers"), dict):
        data["mcpServers"] = {}
    return data


async def aread_config(config_path: Path | str) -> dict[str, object]:
    """Async version of read_config. Use from async code to avoid blocking the event loop."""
    return await asyncio.to_thread(read_config, config_path)


def server_names(raw_config: dict[str, object]) -> set[str]:
    """Names of the servers configured in a raw config dict."""
    servers = raw_config.get("mcpServers", {})
    if not isinstance(servers, dict):
        return set()
    return set(servers)
