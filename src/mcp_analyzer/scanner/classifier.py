"""Free-text tech stack classifier.

Each label owns one case-insensitive regular expression. Tests are
independent and run in declaration order, so the output order is the table
order below. The only cross-test rule: a TypeScript match suppresses the
plain JavaScript label.

Known overlap: the Java pattern is not right-bounded, so a description that
mentions JavaScript also yields Java.
"""

from __future__ import annotations

import re

from mcp_analyzer.models import TechnologyStack


def _keywords(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


_TYPESCRIPT = _keywords(r"\b(?:typescript|tsx?)\b")

_JAVASCRIPT = _keywords(r"\b(?:javascript|jsx?|node\.?js|express|react|vue)\b")

LANGUAGE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("TypeScript", _TYPESCRIPT),
    ("JavaScript", _JAVASCRIPT),
    ("Python", _keywords(r"\b(?:python|django|flask|fastapi|jupyter|numpy|pandas)\b")),
    ("Java", _keywords(r"\b(?:java|spring\s*boot|spring|gradle|maven)")),
    ("Go", _keywords(r"\b(?:go|golang)\b")),
    ("Ruby", _keywords(r"\b(?:ruby|rails|rack|sinatra)\b")),
    ("C#", _keywords(r"(?:\bc#|\.net\b|\basp\.net\b|\bdotnet\b)")),
    ("PHP", _keywords(r"\b(?:php|laravel|symfony|wordpress)\b")),
    ("Swift", _keywords(r"\b(?:swift|ios|iphone|ipad)\b")),
    ("Kotlin", _keywords(r"\b(?:kotlin|android)\b")),
    ("Rust", _keywords(r"\b(?:rust|cargo)\b")),
    ("Dart", _keywords(r"\b(?:dart|flutter)\b")),
)

FRAMEWORK_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("React", _keywords(r"\breact\b")),
    ("Next.js", _keywords(r"\bnext\.?js\b")),
    ("Vue.js", _keywords(r"\bvue(?:\.?js)?\b")),
    ("Angular", _keywords(r"\bangular\b")),
    ("Express", _keywords(r"\bexpress(?:\.?js)?\b")),
    ("Django", _keywords(r"\bdjango\b")),
    ("Flask", _keywords(r"\bflask\b")),
    ("FastAPI", _keywords(r"\bfastapi\b")),
    ("Rails", _keywords(r"\brails\b")),
    ("Spring", _keywords(r"\bspring(?:\s*boot)?\b")),
    ("Laravel", _keywords(r"\blaravel\b")),
    ("ASP.NET", _keywords(r"\basp\.net\b")),
    ("Svelte", _keywords(r"\bsvelte\b")),
    ("Flutter", _keywords(r"\bflutter\b")),
    ("Gatsby", _keywords(r"\bgatsby\b")),
    ("Nuxt.js", _keywords(r"\bnuxt(?:\.?js)?\b")),
)

FEATURE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("API", _keywords(r"\b(?:api|apis|rest|restful|graphql|endpoints?)\b")),
    (
        "Database",
        _keywords(r"\b(?:database|db|sql|nosql|mongo(?:db)?|postgres(?:ql)?|mysql|sqlite)\b"),
    ),
    (
        "Authentication",
        _keywords(r"\b(?:auth\w*|login|users?|permissions?|roles?|jwt|oauth\d*)\b"),
    ),
    ("Frontend", _keywords(r"\b(?:frontend|ui|interface|client|spa|single\s*page)\b")),
    ("Backend", _keywords(r"\b(?:backend|server|api|apis)\b")),
    ("Mobile", _keywords(r"\b(?:mobile|ios|android|app|react\s*native)\b")),
    (
        "Testing",
        _keywords(r"\b(?:tests?|testing|jest|mocha|cypress|unit\s*tests?|e2e)\b"),
    ),
    (
        "Containerization",
        _keywords(r"\b(?:docker|containers?|kubernetes|k8s|containeri[sz]\w*)\b"),
    ),
    (
        "CI/CD",
        _keywords(
            r"(?:\bci/cd\b|\bci\b|\bcd\b|continuous\s*(?:integration|deployment)"
            r"|github\s*actions|\bjenkins\b)"
        ),
    ),
    ("File Storage", _keywords(r"\b(?:files?|uploads?|downloads?|storage|s3|blob)\b")),
    (
        "Real-time",
        _keywords(r"(?:\breal[\s-]*time\b|\bwebsockets?\b|\bsocket\.io\b|\blive\s*updates?\b)"),
    ),
    ("Analytics", _keywords(r"\b(?:analytics|metrics|monitoring|logging)\b")),
)


def analyze_tech_stack(description: str) -> TechnologyStack:
    """Classify a free-text project description.

    Args:
        description: Natural-language description or requirements text.

    Returns:
        TechnologyStack with labels in pattern declaration order.
    """
    typescript = bool(_TYPESCRIPT.search(description))

    languages: list[str] = []
    for label, pattern in LANGUAGE_PATTERNS:
        if label == "JavaScript" and typescript:
            continue
        if pattern.search(description):
            languages.append(label)

    return TechnologyStack(
        languages=languages,
        frameworks=_matching(FRAMEWORK_PATTERNS, description),
        features=_matching(FEATURE_PATTERNS, description),
    )


def _matching(patterns: tuple[tuple[str, re.Pattern[str]], ...], text: str) -> list[str]:
    return [label for label, pattern in patterns if pattern.search(text)]
