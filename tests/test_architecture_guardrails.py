from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        if "dist" in path.parts:
            continue
        yield path


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom):
            yield node.module or ""


def _violations(root: Path, forbidden: tuple[str, ...]):
    found: list[tuple[str, str]] = []
    for path in _python_files(root):
        for name in _imported_modules(path):
            if any(name == f or name.startswith(f + ".") for f in forbidden):
                found.append((str(path.relative_to(ROOT)), name))
    return found


def test_core_layer_does_not_import_infra_layer():
    violations = _violations(ROOT / "core", ("infra", "main_cli"))
    assert not violations, f"Core layer imports infra layer: {violations}"


def test_projection_and_calendar_math_stay_pure():
    forbidden = ("sqlalchemy", "infra", "core.interfaces", "core.services.delivery")
    violations = _violations(ROOT / "core" / "services" / "projection", forbidden)
    violations += _violations(ROOT / "core" / "services" / "calendar", forbidden)
    assert not violations, f"Pure modules pull in persistence: {violations}"
