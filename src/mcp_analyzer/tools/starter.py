"""Starter files for a freshly planned project.

Invariants:
  1. An existing file is never overwritten.
  2. JSON starters use the same two-space layout as the generated configs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from mcp_analyzer.errors import ConfigWriteError
from mcp_analyzer.models import TechnologyStack

logger = logging.getLogger(__name__)

_TS_CONFIG: dict[str, object] = {
    "compilerOptions": {
        "target": "ES2020",
        "module": "NodeNext",
        "moduleResolution": "NodeNext",
        "esModuleInterop": True,
        "outDir": "./dist",
        "rootDir": "./src",
        "strict": True,
        "resolveJsonModule": True,
    },
    "include": ["src/**/*"],
}

_EXPRESS_INDEX = """\
import express from 'express';

const app = express();
const port = process.env.PORT || 3000;

app.use(express.json());

app.get('/', (req, res) => {
  res.send('Hello World!');
});

app.listen(port, () => {
  console.log(`Server running at http://localhost:${port}`);
});
"""

_PLAIN_INDEX = """\
function main() {
  console.log('Hello World!');
}

main();
"""

_FLASK_MAIN = """\
from flask import Flask, jsonify

app = Flask(__name__)


@app.route("/")
def hello_world():
    return jsonify({"message": "Hello, World!"})


if __name__ == "__main__":
    app.run(debug=True)
"""

_FASTAPI_MAIN = """\
from fastapi import FastAPI

app = FastAPI()


@app.get("/")
async def root():
    return {"message": "Hello World"}
"""

_PLAIN_MAIN = """\
def main():
    print("Hello, World!")


if __name__ == "__main__":
    main()
"""

# First matching framework wins.
_PYTHON_REQUIREMENTS: tuple[tuple[str, str], ...] = (
    ("Flask", "flask>=2.0.0\n"),
    ("Django", "django>=4.0.0\n"),
    ("FastAPI", "fastapi>=0.95.0\nuvicorn>=0.21.0\n"),
)


def generate_starter_files(project_root: Path | str, stack: TechnologyStack) -> list[str]:
    """Create starter files for *stack* under *project_root*.

    Returns:
        POSIX paths, relative to *project_root*, of the files actually created.

    Raises:
        ConfigWriteError: If a file cannot be written.
    """
    root = Path(project_root)
    files: dict[str, str] = {}

    is_typescript = "TypeScript" in stack.languages
    if is_typescript or "JavaScript" in stack.languages:
        files["package.json"] = _to_json(_package_json(root.name, stack))

    if is_typescript:
        files["tsconfig.json"] = _to_json(_TS_CONFIG)
        files["src/index.ts"] = (
            _EXPRESS_INDEX if "Express" in stack.frameworks else _PLAIN_INDEX
        )
    elif "Python" in stack.languages:
        files["requirements.txt"] = _requirements(stack)
        files["main.py"] = _python_main(stack)

    return [rel for rel, content in files.items() if _write_if_absent(root, rel, content)]


def _package_json(name: str, stack: TechnologyStack) -> dict[str, object]:
    dependencies = {
        "typescript": "^5.0.0",
        "@types/node": "^20.0.0",
        "ts-node": "^10.9.0",
    }
    if "React" in stack.frameworks:
        dependencies["@types/react"] = "^18.0.0"
        dependencies["@types/react-dom"] = "^18.0.0"
    if "Express" in stack.frameworks:
        dependencies["@types/express"] = "^4.17.0"

    return {
        "name": name,
        "version": "1.0.0",
        "description": "Generated project",
        "main": "dist/index.js",
        "scripts": {
            "build": "tsc",
            "start": "ts-node src/index.ts",
            "test": "jest",
        },
        "dependencies": dependencies,
        "devDependencies": {
            "@types/jest": "^29.0.0",
            "jest": "^29.0.0",
            "ts-jest": "^29.0.0",
        },
    }


def _requirements(stack: TechnologyStack) -> str:
    content = "# Project dependencies\n"
    for framework, lines in _PYTHON_REQUIREMENTS:
        if framework in stack.frameworks:
            return content + lines
    return content


def _python_main(stack: TechnologyStack) -> str:
    if "Flask" in stack.frameworks:
        return _FLASK_MAIN
    if "FastAPI" in stack.frameworks:
        return _FASTAPI_MAIN
    return _PLAIN_MAIN


def _to_json(data: object) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def _write_if_absent(root: Path, relative: str, content: str) -> bool:
    path = root / relative
    if path.exists():
        logger.info("Keeping existing starter file %s", path)
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ConfigWriteError(f"Failed to write starter file {path}: {exc}") from exc
    return True
