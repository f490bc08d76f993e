"""Tests for the analyze/plan/enhance MCP tools (tools/*.py)."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx

from mcp_analyzer.discovery.base import ToolDiscoveryPort
from mcp_analyzer.discovery.servers import GitHubToolDiscovery
from mcp_analyzer.errors import DiscoveryError
from mcp_analyzer.models import (
    ProjectStats,
    RuleDescriptor,
    TechnologyStack,
    ToolDescriptor,
)
from mcp_analyzer.scanner.detector import DefaultProjectScanner
from mcp_analyzer.scanner.limits import ScanLimits
from mcp_analyzer.server import AppContext
from mcp_analyzer.tools._report import format_analysis_report, format_enhancement_report
from mcp_analyzer.tools.analyze import analyze_project
from mcp_analyzer.tools.enhance import combine_stacks, enhance_project
from mcp_analyzer.tools.plan import plan_project

# ─── Helpers ─────────────────────────────────────────────────


def _tool(name: str) -> ToolDescriptor:
    return ToolDescriptor(
        name=name,
        install_command="npx",
        install_args=["-y", f"@modelcontextprotocol/server-{name}"],
    )


class FakeToolDiscovery:
    def __init__(self, names: tuple[str, ...] = (), error: Exception | None = None):
        self.names = names
        self.error = error
        self.calls: list[list[str]] = []

    async def discover_tools(self, technologies: list[str]) -> dict[str, ToolDescriptor]:
        self.calls.append(technologies)
        if self.error is not None:
            raise self.error
        return {name: _tool(name) for name in self.names}


class FakeRuleDiscovery:
    async def discover_rules(self, technologies: list[str]) -> list[RuleDescriptor]:
        return [
            RuleDescriptor(name=f"{tech.lower()}-style", description="d") for tech in technologies
        ]


def _app(tools: ToolDiscoveryPort | None = None) -> AppContext:
    return AppContext(
        http_client=MagicMock(spec=httpx.AsyncClient),
        tool_discovery=tools or FakeToolDiscovery(("postgres",)),
        rule_discovery=FakeRuleDiscovery(),
        scanner=DefaultProjectScanner(),
        scan_limits=ScanLimits(),
    )


def _make_ctx(app: object) -> MagicMock:
    """Build a mock Context whose lifespan context is *app*."""
    ctx = MagicMock()
    ctx.request_context.lifespan_context = app
    ctx.info = AsyncMock()
    ctx.error = AsyncMock()
    return ctx


def _express_project(root: Path) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text('{"dependencies": {"express": "^4.18.0"}}')
    (root / "index.js").write_text("require('express')\n")
    return root


def _read_json(path: Path) -> object:
    return json.loads(path.read_text())


# ═══════════════════════════════════════════════════════════════
# analyze_project
# ═══════════════════════════════════════════════════════════════


class TestAnalyzeProject:
    async def test_writes_configs_and_reports(self, tmp_path: Path):
        project = _express_project(tmp_path / "api")
        discovery = FakeToolDiscovery(("postgres",))

        result = await analyze_project(_make_ctx(_app(discovery)), str(project))

        assert result["success"] is True
        assert result["tools"] == ["postgres"]
        assert result["stats"]["languages"] == ["JavaScript"]
        assert result["stats"]["frameworks"] == ["Express"]
        assert result["stats"]["features"] == ["API"]
        assert discovery.calls == [["JavaScript", "Express", "api"]]

        config = _read_json(project / ".cursor" / "mcp.json")
        assert config == {
            "mcpServers": {
                "postgres": {
                    "command": "npx",
                    "args": ["-y", "@modelcontextprotocol/server-postgres"],
                }
            }
        }
        rules = _read_json(project / ".cursor" / "rules" / "project_rules.json")
        assert [rule["name"] for rule in rules] == ["javascript-style", "express-style"]

        report = result["report"]
        assert report.startswith("# Project Analysis Complete")
        assert "- **Frameworks**: Express" in report
        assert "- postgres" in report
        assert ".json (1)" in report
        assert "`.cursor/mcp.json`" in report

    async def test_discovery_failure_writes_fallback_tools(self, tmp_path: Path):
        project = _express_project(tmp_path / "api")
        app = _app(FakeToolDiscovery(error=DiscoveryError("GitHub unreachable")))

        result = await analyze_project(_make_ctx(app), str(project))

        assert result["success"] is True
        config = _read_json(project / ".cursor" / "mcp.json")
        assert list(config["mcpServers"]) == ["brave-search", "sequential-thinking"]

    async def test_unreachable_github_on_empty_project_writes_essentials(self, tmp_path: Path):
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.side_effect = httpx.ConnectError("unreachable")

        result = await analyze_project(_make_ctx(_app(GitHubToolDiscovery(http))), str(tmp_path))

        assert result["success"] is True
        assert result["tools"] == ["brave-search", "sequential-thinking"]
        config = _read_json(tmp_path / ".cursor" / "mcp.json")
        assert config["mcpServers"]["brave-search"]["env"] == {"BRAVE_API_KEY": "YOUR_API_KEY_HERE"}
        assert config["mcpServers"]["sequential-thinking"]["args"] == [
            "-y",
            "@modelcontextprotocol/server-sequential-thinking",
        ]

    async def test_empty_project(self, tmp_path: Path):
        result = await analyze_project(_make_ctx(_app()), str(tmp_path))
        assert result["success"] is True
        assert "- **Frameworks**: None detected" in result["report"]

    async def test_blank_path(self):
        result = await analyze_project(_make_ctx(_app()), "   ")
        assert result["success"] is False
        assert "project_path is required" in result["error"]

    async def test_missing_path_is_soft_failure(self, tmp_path: Path):
        result = await analyze_project(_make_ctx(_app()), str(tmp_path / "missing"))
        assert result["success"] is False
        assert result["error"].startswith("Error analyzing project:")
        assert not (tmp_path / "missing").exists()

    async def test_missing_app_context_is_internal_error(self, tmp_path: Path):
        ctx = _make_ctx(object())
        result = await analyze_project(ctx, str(tmp_path))
        assert result == {"success": False, "error": "Internal error: TypeError"}
        ctx.error.assert_awaited_once()


# ═══════════════════════════════════════════════════════════════
# plan_project
# ═══════════════════════════════════════════════════════════════


class TestPlanProject:
    async def test_creates_project(self, tmp_path: Path):
        target = tmp_path / "new-service"

        result = await plan_project(
            _make_ctx(_app()),
            "A TypeScript Express API",
            str(target),
        )

        assert result["success"] is True
        assert result["stack"] == {
            "languages": ["TypeScript"],
            "frameworks": ["Express"],
            "features": ["API", "Backend"],
        }
        assert result["starter_files"] == ["package.json", "tsconfig.json", "src/index.ts"]
        assert (target / ".cursor" / "mcp.json").is_file()
        assert (target / ".cursor" / "rules" / "project_rules.json").is_file()
        assert (target / "src" / "index.ts").is_file()
        assert "`src/index.ts`" in result["report"]
        assert "- **Key Features**: API, Backend" in result["report"]

    async def test_existing_starter_files_kept(self, tmp_path: Path):
        (tmp_path / "main.py").write_text("# mine\n")

        result = await plan_project(_make_ctx(_app()), "A Flask app", str(tmp_path))

        assert result["success"] is True
        assert result["starter_files"] == ["requirements.txt"]
        assert (tmp_path / "main.py").read_text() == "# mine\n"

    async def test_blank_description(self, tmp_path: Path):
        result = await plan_project(_make_ctx(_app()), "", str(tmp_path))
        assert result["success"] is False
        assert "project_description is required" in result["error"]

    async def test_path_is_a_file(self, tmp_path: Path):
        target = tmp_path / "taken"
        target.write_text("x")
        result = await plan_project(_make_ctx(_app()), "A Go service", str(target))
        assert result["success"] is False
        assert result["error"].startswith("Error planning project:")


# ═══════════════════════════════════════════════════════════════
# enhance_project
# ═══════════════════════════════════════════════════════════════


class TestEnhanceProject:
    async def test_adds_only_new_tools(self, tmp_path: Path):
        project = _express_project(tmp_path / "api")
        config_path = project / ".cursor" / "mcp.json"
        config_path.parent.mkdir()
        config_path.write_text(
            json.dumps({"mcpServers": {"brave-search": {"command": "custom", "args": []}}})
        )
        discovery = FakeToolDiscovery(("brave-search", "postgres"))

        result = await enhance_project(
            _make_ctx(_app(discovery)),
            str(project),
            "Add PostgreSQL database",
        )

        assert result["success"] is True
        assert result["added_tools"] == ["postgres"]
        assert result["new_features"] == ["Database"]
        assert result["stack"]["languages"] == ["JavaScript"]
        assert result["stack"]["features"] == ["Database"]
        assert discovery.calls == [["JavaScript", "Express", "database"]]

        config = _read_json(config_path)
        assert config["mcpServers"]["brave-search"] == {"command": "custom", "args": []}
        assert "postgres" in config["mcpServers"]
        assert "## New MCP Tools Added\n- postgres" in result["report"]

    async def test_nothing_new(self, tmp_path: Path):
        project = _express_project(tmp_path / "api")
        config_path = project / ".cursor" / "mcp.json"
        config_path.parent.mkdir()
        config_path.write_text(json.dumps({"mcpServers": {"postgres": {"command": "x"}}}))

        result = await enhance_project(
            _make_ctx(_app(FakeToolDiscovery(("postgres",)))),
            str(project),
            "more endpoints",
        )

        assert result["added_tools"] == []
        assert "No new tools needed for the requirements." in result["report"]

    async def test_invalid_existing_config_treated_as_empty(self, tmp_path: Path):
        project = _express_project(tmp_path / "api")
        config_path = project / ".cursor" / "mcp.json"
        config_path.parent.mkdir()
        config_path.write_text("{not json")

        result = await enhance_project(_make_ctx(_app()), str(project), "add a database")

        assert result["success"] is True
        assert result["added_tools"] == ["postgres"]
        assert list(_read_json(config_path)["mcpServers"]) == ["postgres"]

    async def test_missing_config_created(self, tmp_path: Path):
        project = _express_project(tmp_path / "api")
        result = await enhance_project(_make_ctx(_app()), str(project), "add a database")
        assert result["success"] is True
        assert (project / ".cursor" / "mcp.json").is_file()
        assert not (project / ".cursor" / "rules").exists()

    async def test_discovery_failure_keeps_existing(self, tmp_path: Path):
        project = _express_project(tmp_path / "api")
        config_path = project / ".cursor" / "mcp.json"
        config_path.parent.mkdir()
        original = {"mcpServers": {"git": {"command": "npx", "args": []}}}
        config_path.write_text(json.dumps(original))
        app = _app(FakeToolDiscovery(error=httpx.ConnectError("offline")))

        result = await enhance_project(_make_ctx(app), str(project), "add a database")

        assert result["success"] is True
        assert result["added_tools"] == []
        assert _read_json(config_path) == original

    async def test_missing_project(self, tmp_path: Path):
        result = await enhance_project(_make_ctx(_app()), str(tmp_path / "gone"), "add auth")
        assert result["success"] is False
        assert result["error"].startswith("Error enhancing project:")

    async def test_blank_requirements(self, tmp_path: Path):
        result = await enhance_project(_make_ctx(_app()), str(tmp_path), "\n")
        assert result["success"] is False
        assert "new_requirements is required" in result["error"]


class TestCombineStacks:
    def test_union_with_requested_features_only(self):
        existing = TechnologyStack(languages=["Python"], frameworks=["Django"], features=["API"])
        requested = TechnologyStack(languages=["TypeScript"], features=["Real-time"])

        combined = combine_stacks(existing, requested)

        assert combined.languages == ["Python", "TypeScript"]
        assert combined.frameworks == ["Django"]
        assert combined.features == ["Real-time"]


# ═══════════════════════════════════════════════════════════════
# Reports
# ═══════════════════════════════════════════════════════════════


class TestReports:
    def test_analysis_report_empty_sections(self, tmp_path: Path):
        report = format_analysis_report(ProjectStats(), [], [], tmp_path)
        assert "- **Languages**: None detected" in report
        assert "- **File types**: None detected" in report
        assert "YOUR_API_KEY_HERE" in report

    def test_enhancement_report_lists_features(self, tmp_path: Path):
        requested = TechnologyStack(features=["Authentication", "Real-time"])
        report = format_enhancement_report(
            requested, ["socket-server"], [tmp_path / ".cursor" / "mcp.json"], tmp_path
        )
        assert "- Authentication\n- Real-time" in report
        assert "- socket-server" in report
        assert "`.cursor/mcp.json`" in report
