"""Domain models for mcp-analyzer.

Value objects are frozen dataclasses. ProjectStats is the one exception: it is
the accumulator a single scan mutates while walking the tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def _union(*groups: list[str]) -> list[str]:
    """Order-preserving union of string lists."""
    return list(dict.fromkeys(item for group in groups for item in group))


# ─── Detection Models ─────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class TechnologyStack:
    """Languages, frameworks and features describing a project."""

    languages: list[str] = field(default_factory=list)
    frameworks: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)

    def union(self, other: TechnologyStack) -> TechnologyStack:
        return TechnologyStack(
            languages=_union(self.languages, other.languages),
            frameworks=_union(self.frameworks, other.frameworks),
            features=_union(self.features, other.features),
        )


@dataclass(slots=True)
class ProjectStats:
    """Statistics accumulated while scanning one project tree.

    Languages, frameworks and dependencies are deduplicated on insertion.
    Features may repeat until finalize() collapses them.
    """

    file_types: dict[str, int] = field(default_factory=dict)
    languages: list[str] = field(default_factory=list)
    frameworks: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)

    def count_extension(self, ext: str) -> None:
        self.file_types[ext] = self.file_types.get(ext, 0) + 1

    def add_language(self, name: str) -> None:
        if name not in self.languages:
            self.languages.append(name)

    def add_framework(self, name: str) -> None:
        if name not in self.frameworks:
            self.frameworks.append(name)

    def add_dependency(self, name: str) -> None:
        if name and name not in self.dependencies:
            self.dependencies.append(name)

    def add_feature(self, name: str) -> None:
        self.features.append(name)

    def finalize(self) -> ProjectStats:
        """Drop duplicate features, keeping first-seen order."""
        self.features = list(dict.fromkeys(self.features))
        return self

    def as_stack(self) -> TechnologyStack:
        return TechnologyStack(
            languages=list(self.languages),
            frameworks=list(self.frameworks),
            features=list(dict.fromkeys(self.features)),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "file_types": dict(self.file_types),
            "languages": list(self.languages),
            "frameworks": list(self.frameworks),
            "dependencies": list(self.dependencies),
            "features": list(self.features),
        }


# ─── Config Models ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """A single MCP server entry in an mcp.json file."""

    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"command": self.command, "args": list(self.args)}
        if self.env:
            result["env"] = dict(self.env)
        return result


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    """An MCP server returned by tool discovery, with its install command."""

    name: str
    install_command: str
    install_args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    description: str = ""
    repository: str = ""

    def to_server_config(self) -> ServerConfig:
        return ServerConfig(
            command=self.install_command,
            args=list(self.install_args),
            env=dict(self.env),
        )


@dataclass(frozen=True, slots=True)
class RuleDescriptor:
    """A coding rule written to .cursor/rules/project_rules.json."""

    name: str
    description: str
    pattern: str | None = None
    scope: str | None = None  # comma-joined extensions, e.g. "ts,tsx"
    enabled: bool = True

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"name": self.name, "description": self.description}
        if self.pattern is not None:
            result["pattern"] = self.pattern
        if self.scope is not None:
            result["scope"] = self.scope
        result["enabled"] = self.enabled
        return result
