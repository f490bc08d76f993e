"""Tests for starter-file generation (tools/starter.py)."""

from __future__ import annotations

import json
from pathlib import Path

from mcp_analyzer.models import TechnologyStack
from mcp_analyzer.tools.starter import generate_starter_files


class TestJavaScriptFamily:
    def test_typescript_express(self, tmp_path: Path):
        stack = TechnologyStack(languages=["TypeScript"], frameworks=["Express"])

        created = generate_starter_files(tmp_path, stack)

        assert created == ["package.json", "tsconfig.json", "src/index.ts"]
        package = json.loads((tmp_path / "package.json").read_text())
        assert package["name"] == tmp_path.name
        assert "@types/express" in package["dependencies"]
        assert "@types/react" not in package["dependencies"]
        assert "import express" in (tmp_path / "src" / "index.ts").read_text()
        tsconfig = json.loads((tmp_path / "tsconfig.json").read_text())
        assert tsconfig["compilerOptions"]["strict"] is True

    def test_typescript_plain_index(self, tmp_path: Path):
        generate_starter_files(tmp_path, TechnologyStack(languages=["TypeScript"]))
        index = (tmp_path / "src" / "index.ts").read_text()
        assert "function main()" in index
        assert "express" not in index

    def test_javascript_only_gets_package_json(self, tmp_path: Path):
        stack = TechnologyStack(languages=["JavaScript"], frameworks=["React"])
        assert generate_starter_files(tmp_path, stack) == ["package.json"]
        package = json.loads((tmp_path / "package.json").read_text())
        assert "@types/react-dom" in package["dependencies"]

    def test_typescript_wins_over_python(self, tmp_path: Path):
        stack = TechnologyStack(languages=["TypeScript", "Python"])
        created = generate_starter_files(tmp_path, stack)
        assert "requirements.txt" not in created
        assert not (tmp_path / "main.py").exists()


class TestPython:
    def test_flask(self, tmp_path: Path):
        stack = TechnologyStack(languages=["Python"], frameworks=["Flask"])

        assert generate_starter_files(tmp_path, stack) == ["requirements.txt", "main.py"]
        assert "flask>=2.0.0" in (tmp_path / "requirements.txt").read_text()
        assert "from flask import Flask" in (tmp_path / "main.py").read_text()

    def test_fastapi(self, tmp_path: Path):
        stack = TechnologyStack(languages=["Python"], frameworks=["FastAPI"])
        generate_starter_files(tmp_path, stack)
        requirements = (tmp_path / "requirements.txt").read_text()
        assert "fastapi>=0.95.0" in requirements
        assert "uvicorn>=0.21.0" in requirements
        assert "FastAPI()" in (tmp_path / "main.py").read_text()

    def test_django_uses_plain_main(self, tmp_path: Path):
        stack = TechnologyStack(languages=["Python"], frameworks=["Django"])
        generate_starter_files(tmp_path, stack)
        assert "django>=4.0.0" in (tmp_path / "requirements.txt").read_text()
        assert 'print("Hello, World!")' in (tmp_path / "main.py").read_text()

    def test_plain_python(self, tmp_path: Path):
        generate_starter_files(tmp_path, TechnologyStack(languages=["Python"]))
        assert (tmp_path / "requirements.txt").read_text() == "# Project dependencies\n"


class TestNeverOverwrite:
    def test_existing_file_kept(self, tmp_path: Path):
        (tmp_path / "main.py").write_text("keep me\n")
        stack = TechnologyStack(languages=["Python"], frameworks=["Flask"])

        created = generate_starter_files(tmp_path, stack)

        assert created == ["requirements.txt"]
        assert (tmp_path / "main.py").read_text() == "keep me\n"

    def test_no_languages_creates_nothing(self, tmp_path: Path):
        assert generate_starter_files(tmp_path, TechnologyStack(languages=["Go"])) == []
        assert list(tmp_path.iterdir()) == []
