"""Manifest extractors -- contribute dependencies, frameworks and features.

Extractors are selected by exact file name while the tree is walked. Each one
reads its file through a parse step that returns ``None`` on any read or parse
failure; the extractor discards that result and contributes nothing, so a
malformed manifest never aborts the scan.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from pathlib import Path

import yaml

from mcp_analyzer.models import ProjectStats
from mcp_analyzer.scanner.tables import (
    CI_MARKERS,
    CONTAINER_MARKERS,
    NODE_FEATURES,
    NODE_FRAMEWORKS,
    PYTHON_FEATURES,
    PYTHON_FRAMEWORKS,
)

logger = logging.getLogger(__name__)

_Extractor = Callable[[Path, ProjectStats], None]

_SPRING_MARKER = "org.springframework"
_RAILS_MARKER = "rails"
_REQUIREMENT_SPLIT_RE = re.compile(r"==|>=")


# ─── Public API ──────────────────────────────────────────────


def extract_manifest(path: Path, stats: ProjectStats) -> bool:
    """Run the extractor registered for ``path.name``.

    Returns:
        True if the file name is a recognized manifest or marker.
    """
    extractor = _EXTRACTORS.get(path.name)
    if extractor is None:
        return False
    extractor(path, stats)
    return True


# ─── Node.js ─────────────────────────────────────────────────


def extract_package_json(path: Path, stats: ProjectStats) -> None:
    deps = parse_package_json(path)
    if deps is None:
        return  # unreadable or malformed, contributes nothing
    for dep in deps:
        stats.add_dependency(dep)
    _match_frameworks(deps, NODE_FRAMEWORKS, stats)
    _match_features(deps, NODE_FEATURES, stats)


def parse_package_json(path: Path) -> list[str] | None:
    """Return the union of ``dependencies`` and ``devDependencies`` names."""
    text = _read_text(path)
    if text is None:
        return None
    try:
        data = json.loads(text)
    except ValueError as exc:
        logger.debug("Malformed package.json at %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        return None

    names: list[str] = []
    for section in ("dependencies", "devDependencies"):
        block = data.get(section)
        if isinstance(block, dict):
            names.extend(name for name in block if name not in names)
    return names


# ─── Python ──────────────────────────────────────────────────


def extract_requirements_txt(path: Path, stats: ProjectStats) -> None:
    reqs = parse_requirements_txt(path)
    if reqs is None:
        return
    for req in reqs:
        stats.add_dependency(req)
    lowered = [req.lower() for req in reqs]
    _match_frameworks(lowered, PYTHON_FRAMEWORKS, stats)
    _match_features(lowered, PYTHON_FEATURES, stats)


def parse_requirements_txt(path: Path) -> list[str] | None:
    """Return bare package names, one per requirement line.

    Examples:
        ``django==4.2`` → ``django``
        ``requests >= 2.0`` → ``requests``
    """
    text = _read_text(path)
    if text is None:
        return None

    names: list[str] = []
    for line in text.splitlines():
        line = line.strip()
        # Skip comments, blank lines, flags (-r, -e, etc.)
        if not line or line.startswith("#") or line.startswith("-"):
            continue
        name = _REQUIREMENT_SPLIT_RE.split(line, maxsplit=1)[0].strip()
        if name:
            names.append(name)
    return names


# ─── JVM ─────────────────────────────────────────────────────


def extract_gradle(path: Path, stats: ProjectStats) -> None:
    _extract_jvm_build(path, stats, build_tool="Gradle")


def extract_pom_xml(path: Path, stats: ProjectStats) -> None:
    _extract_jvm_build(path, stats, build_tool="Maven")


def _extract_jvm_build(path: Path, stats: ProjectStats, *, build_tool: str) -> None:
    stats.add_language("Java")
    stats.add_framework(build_tool)
    text = _read_text(path)
    if text is not None and _SPRING_MARKER in text:
        stats.add_framework("Spring")


# ─── Ruby ────────────────────────────────────────────────────


def extract_gemfile(path: Path, stats: ProjectStats) -> None:
    stats.add_language("Ruby")
    text = _read_text(path)
    if text is not None and _RAILS_MARKER in text:
        stats.add_framework("Rails")


# ─── Dart ────────────────────────────────────────────────────


def extract_pubspec_yaml(path: Path, stats: ProjectStats) -> None:
    stats.add_language("Dart")
    deps = parse_pubspec_yaml(path)
    if deps is None:
        return
    for dep in deps:
        stats.add_dependency(dep)
    if "flutter" in deps:
        stats.add_framework("Flutter")


def parse_pubspec_yaml(path: Path) -> list[str] | None:
    """Return dependency names from ``dependencies`` and ``dev_dependencies``."""
    text = _read_text(path)
    if text is None:
        return None
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.debug("Malformed pubspec.yaml at %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        return None

    names: list[str] = []
    for section in ("dependencies", "dev_dependencies"):
        block = data.get(section)
        if isinstance(block, dict):
            names.extend(str(name) for name in block if str(name) not in names)
    return names


# ─── Bare-presence markers ───────────────────────────────────


def _mark_containerization(_path: Path, stats: ProjectStats) -> None:
    stats.add_feature("Containerization")


def _mark_ci(_path: Path, stats: ProjectStats) -> None:
    stats.add_feature("CI/CD")


# ─── Helpers ─────────────────────────────────────────────────


def _match_frameworks(
    deps: list[str],
    table: Mapping[str, str],
    stats: ProjectStats,
) -> None:
    for dep in deps:
        framework = table.get(dep)
        if framework is not None:
            stats.add_framework(framework)


def _match_features(
    deps: list[str],
    table: Mapping[str, str],
    stats: ProjectStats,
) -> None:
    """Append each feature signalled by *deps*; repeats collapse at finalize()."""
    for dep in deps:
        feature = table.get(dep)
        if feature is not None:
            stats.add_feature(feature)


def _read_text(path: Path) -> str | None:
    """Read a manifest as UTF-8, or None if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return None


_EXTRACTORS: Mapping[str, _Extractor] = {
    "package.json": extract_package_json,
    "requirements.txt": extract_requirements_txt,
    "build.gradle": extract_gradle,
    "build.gradle.kts": extract_gradle,
    "pom.xml": extract_pom_xml,
    "Gemfile": extract_gemfile,
    "pubspec.yaml": extract_pubspec_yaml,
    **{name: _mark_containerization for name in CONTAINER_MARKERS},
    **{name: _mark_ci for name in CI_MARKERS},
}
