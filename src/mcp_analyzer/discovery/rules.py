"""Discover Cursor rules from cursor.directory search results.

The search page is HTML; rule cards are recognised by CSS class. When the
site yields nothing (layout change, network failure) a small built-in rule
set is returned instead, so callers always get at least one rule.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass

import httpx
from bs4 import BeautifulSoup, Tag

from mcp_analyzer.models import RuleDescriptor

logger = logging.getLogger(__name__)

_SEARCH_URL = "https://cursor.directory/"

_CARD_SELECTOR = ".rule-item, .package-item"
_NAME_SELECTOR = ".rule-name, .package-name"
_DESCRIPTION_SELECTOR = ".rule-description, .package-description"

_SEMICOLON_PATTERN = r"(?<![;{}])\s*$"
_SNAKE_CASE_PATTERN = r"def\s+([A-Z]|[a-z][a-z0-9]*[A-Z])"

_TOKEN_RE = re.compile(r"[a-z0-9#+]+")

# Checked in order against the technology's tokens; first hit wins.
_PATTERN_BY_TECH: tuple[tuple[str, str], ...] = (
    ("javascript", _SEMICOLON_PATTERN),
    ("typescript", _SEMICOLON_PATTERN),
    ("python", _SNAKE_CASE_PATTERN),
)

_SCOPE_BY_TECH: tuple[tuple[str, str], ...] = (
    ("javascript", "js,jsx"),
    ("typescript", "ts,tsx"),
    ("react", "jsx,tsx"),
    ("python", "py"),
    ("java", "java"),
    ("go", "go"),
    ("ruby", "rb"),
    ("php", "php"),
    ("c#", "cs"),
    ("csharp", "cs"),
)


@dataclass
class CursorDirectoryRuleDiscovery:
    """Async adapter for RuleDiscoveryPort backed by cursor.directory."""

    http: httpx.AsyncClient

    async def discover_rules(self, technologies: list[str]) -> list[RuleDescriptor]:
        """Search rules for each technology, deduplicated by name.

        Falls back to default_rules() when no rule is found.
        """
        results = await asyncio.gather(
            *(self._search(tech) for tech in technologies),
            return_exceptions=True,
        )

        rules: list[RuleDescriptor] = []
        seen: set[str] = set()
        for tech, result in zip(technologies, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning("Error searching rules for %s: %s", tech, result)
                continue
            for name, description in result:
                if name in seen:
                    continue
                seen.add(name)
                rules.append(
                    RuleDescriptor(
                        name=name,
                        description=description,
                        pattern=pattern_for_tech(tech),
                        scope=scope_for_tech(tech),
                    )
                )

        if not rules:
            return default_rules(technologies)
        return rules

    async def _search(self, tech: str) -> list[tuple[str, str]]:
        response = await self.http.get(_SEARCH_URL, params={"q": tech})
        if response.status_code != 200:
            logger.warning("cursor.directory returned HTTP %s for %r", response.status_code, tech)
            return []
        return parse_rule_cards(response.text)


def parse_rule_cards(html: str) -> list[tuple[str, str]]:
    """Extract (name, description) pairs from a cursor.directory results page."""
    soup = BeautifulSoup(html, "html.parser")
    cards: list[tuple[str, str]] = []
    for card in soup.select(_CARD_SELECTOR):
        name = _card_text(card, _NAME_SELECTOR)
        description = _card_text(card, _DESCRIPTION_SELECTOR)
        if name and description:
            cards.append((name, description))
    return cards


def _card_text(card: Tag, selector: str) -> str:
    element = card.select_one(selector)
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())


def pattern_for_tech(tech: str) -> str | None:
    return _lookup(_PATTERN_BY_TECH, tech)


def scope_for_tech(tech: str) -> str | None:
    return _lookup(_SCOPE_BY_TECH, tech)


def _lookup(table: tuple[tuple[str, str], ...], tech: str) -> str | None:
    """First table value whose key is a whole token of *tech*."""
    tokens = set(_TOKEN_RE.findall(tech.lower()))
    for key, value in table:
        if key in tokens:
            return value
    return None


def default_rules(technologies: list[str]) -> list[RuleDescriptor]:
    """Built-in rules: one generic rule plus JS/TS and Python conventions."""
    lowered = [tech.lower() for tech in technologies]
    rules = [
        RuleDescriptor(
            name="descriptive-names",
            description="Use descriptive variable and function names",
        )
    ]

    if any("javascript" in t or "typescript" in t for t in lowered):
        rules.append(
            RuleDescriptor(
                name="js-semicolons",
                description="Use semicolons at the end of statements",
                pattern=_SEMICOLON_PATTERN,
                scope="js,jsx,ts,tsx",
            )
        )
        rules.append(
            RuleDescriptor(
                name="const-first",
                description="Prefer const over let when variable is not reassigned",
            )
        )

    if any("python" in t for t in lowered):
        rules.append(
            RuleDescriptor(
                name="py-snake-case",
                description="Use snake_case for variables and functions",
                pattern=_SNAKE_CASE_PATTERN,
                scope="py",
            )
        )

    return rules
