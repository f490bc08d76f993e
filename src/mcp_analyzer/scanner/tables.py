"""Static lookup tables used by the scanner.

Built once at import time and exposed read-only. Keys are matched exactly:
Node dependency names as written in package.json, Python requirement names
lowercased.
"""

from __future__ import annotations

from types import MappingProxyType


def _invert(groups: dict[str, tuple[str, ...]]) -> MappingProxyType[str, str]:
    """Turn {label: (key, ...)} into a read-only {key: label} mapping."""
    return MappingProxyType({key: label for label, keys in groups.items() for key in keys})


# ─── File Extensions ─────────────────────────────────────────

LANGUAGE_EXTENSIONS = _invert(
    {
        "JavaScript": (".js", ".jsx", ".mjs", ".cjs"),
        "TypeScript": (".ts", ".tsx"),
        "Python": (".py", ".pyi", ".pyw"),
        "Java": (".java",),
        "Go": (".go",),
        "Ruby": (".rb", ".rake"),
        "PHP": (".php",),
        "C#": (".cs",),
        "Rust": (".rs",),
        "Swift": (".swift",),
        "Kotlin": (".kt", ".kts"),
        "Dart": (".dart",),
    }
)

# ─── Node.js (package.json) ──────────────────────────────────

NODE_FRAMEWORKS = _invert(
    {
        "React": ("react", "react-dom"),
        "Vue": ("vue",),
        "Next.js": ("next",),
        "Express": ("express",),
        "Angular": ("angular", "@angular/core"),
        "Svelte": ("svelte",),
        "Gatsby": ("gatsby",),
        "Nuxt.js": ("nuxt",),
    }
)

NODE_FEATURES = _invert(
    {
        "Authentication": (
            "passport",
            "jsonwebtoken",
            "auth0",
            "firebase-auth",
            "@auth0/auth0-react",
        ),
        "Database": (
            "mongoose",
            "sequelize",
            "typeorm",
            "prisma",
            "pg",
            "mysql",
            "sqlite",
            "mongodb",
        ),
        "API": ("express", "fastify", "koa", "hapi", "restify", "nest", "graphql"),
        "Testing": ("jest", "mocha", "jasmine", "cypress", "playwright", "vitest", "chai"),
        "Containerization": ("docker-compose", "kubernetes", "k8s"),
        "File Storage": (
            "multer",
            "aws-sdk",
            "@aws-sdk/client-s3",
            "firebase-storage",
            "cloudinary",
        ),
        "Real-time": ("socket.io", "ws", "websocket"),
    }
)

# ─── Python (requirements.txt) ───────────────────────────────

PYTHON_FRAMEWORKS = _invert(
    {
        "Django": ("django",),
        "Flask": ("flask",),
        "FastAPI": ("fastapi",),
    }
)

PYTHON_FEATURES = _invert(
    {
        "Authentication": (
            "authlib",
            "flask-login",
            "django-auth",
            "python-jose",
            "djangorestframework-simplejwt",
        ),
        "Database": (
            "sqlalchemy",
            "django-orm",
            "pymongo",
            "psycopg2",
            "mysql-connector-python",
        ),
        "API": ("django-rest-framework", "flask-restful", "fastapi", "graphene"),
        "Testing": ("pytest", "unittest", "nose", "behave", "robot"),
    }
)

# ─── Marker Files ────────────────────────────────────────────

CONTAINER_MARKERS: frozenset[str] = frozenset(
    {"Dockerfile", "docker-compose.yml", "docker-compose.yaml"}
)

CI_MARKERS: frozenset[str] = frozenset({"Jenkinsfile", ".gitlab-ci.yml"})
