"""Markdown reports returned to the user after each operation."""

from __future__ import annotations

from pathlib import Path

from mcp_analyzer.models import ProjectStats, TechnologyStack

_NONE = "None detected"


def _join(items: list[str]) -> str:
    return ", ".join(items) if items else _NONE


def _bullets(items: list[str], empty: str) -> str:
    return "\n".join(f"- {item}" for item in items) if items else empty


def _relative(paths: list[Path], root: Path) -> list[str]:
    result: list[str] = []
    for path in paths:
        try:
            result.append(path.relative_to(root).as_posix())
        except ValueError:
            result.append(str(path))
    return result


def format_analysis_report(
    stats: ProjectStats,
    tool_names: list[str],
    written: list[Path],
    root: Path,
) -> str:
    file_types = ", ".join(f"{ext} ({count})" for ext, count in stats.file_types.items())
    files = _bullets([f"`{p}`" for p in _relative(written, root)], "- (none)")
    return f"""# Project Analysis Complete

## Project Stats
- **Languages**: {_join(stats.languages)}
- **Frameworks**: {_join(stats.frameworks)}
- **Features**: {_join(stats.features)}
- **File types**: {file_types or _NONE}

## MCP Tools Configured
{_bullets(tool_names, "- (none)")}

## Configuration Files Created
{files}

## Next Steps
1. Review the generated configurations
2. Add any API keys needed (look for "YOUR_API_KEY_HERE")
3. Restart Cursor to apply changes
"""


def format_plan_report(
    stack: TechnologyStack,
    tool_names: list[str],
    written: list[Path],
    root: Path,
) -> str:
    files = _bullets([f"`{p}`" for p in _relative(written, root)], "- (none)")
    return f"""# Project Planning Complete

Based on your project description, I've identified:

## Technology Stack
- **Languages**: {_join(stack.languages)}
- **Frameworks**: {_join(stack.frameworks)}
- **Key Features**: {_join(stack.features)}

## MCP Tools Configured
{_bullets(tool_names, "- (none)")}

## Files Created
{files}

## Next Steps
1. Review the generated configurations and starter files
2. Add any API keys needed (look for "YOUR_API_KEY_HERE")
3. Begin implementation following the project structure
4. When you need to add new features, use the enhance_project tool
"""


def format_enhancement_report(
    requirements: TechnologyStack,
    added: list[str],
    written: list[Path],
    root: Path,
) -> str:
    files = _bullets([f"`{p}`" for p in _relative(written, root)], "- (none)")
    return f"""# Project Enhancement Complete

Based on your new requirements, I've enhanced your MCP setup:

## New Features Detected
{_bullets(requirements.features, "- " + _NONE)}

## New MCP Tools Added
{_bullets(added, "No new tools needed for the requirements.")}

## Configuration Files Updated
{files}

## Next Steps
1. Review the updated configurations
2. Add any API keys needed for new tools (look for "YOUR_API_KEY_HERE")
3. Restart Cursor to apply changes
4. Begin implementing the new features
"""
