"""Atomic JSON writes for generated project configs.

Invariants:
  1. Output is two-space-indented JSON with a trailing newline.
  2. Writes are atomic: write to unique temp file, then os.replace().
  3. Parent directories are created as needed.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import os
import tempfile
from pathlib import Path

from mcp_analyzer.errors import ConfigWriteError
from mcp_analyzer.models import RuleDescriptor

CURSOR_DIR = ".cursor"
MCP_CONFIG_FILE = "mcp.json"
RULES_DIR = "rules"
RULES_FILE = "project_rules.json"


def mcp_config_path(project_root: Path | str) -> Path:
    return Path(project_root) / CURSOR_DIR / MCP_CONFIG_FILE


def rules_path(project_root: Path | str) -> Path:
    return Path(project_root) / CURSOR_DIR / RULES_DIR / RULES_FILE


def write_project_configs(
    project_root: Path | str,
    config: dict[str, object],
    rules: list[RuleDescriptor] | None = None,
) -> list[Path]:
    """Write ``.cursor/mcp.json`` and, when given, ``.cursor/rules/project_rules.json``.

    Returns:
        The paths written, in write order.
    """
    written = [mcp_config_path(project_root)]
    write_json(written[0], config)
    if rules is not None:
        written.append(rules_path(project_root))
        write_json(written[1], [rule.to_dict() for rule in rules])
    return written


async def awrite_project_configs(
    project_root: Path | str,
    config: dict[str, object],
    rules: list[RuleDescriptor] | None = None,
) -> list[Path]:
    """Async version of write_project_configs."""
    return await asyncio.to_thread(write_project_configs, project_root, config, rules)


def write_json(path: Path | str, data: object) -> None:
    """Write JSON atomically: write to unique temp file then rename."""
    path = Path(path)
    fd = None
    tmp_path: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            suffix=".tmp",
            prefix=f".{path.stem}_",
        )
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        fd = None
        os.replace(tmp_path, str(path))
        tmp_path = None
    except PermissionError as exc:
        raise ConfigWriteError(f"Permission denied writing to {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigWriteError(f"Failed to write {path}: {exc}") from exc
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)
