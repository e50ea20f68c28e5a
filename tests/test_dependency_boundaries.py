"""Layering: contracts <- tools <- pipeline <- cli, never the other way."""

import ast
from pathlib import Path
from typing import List, Set

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]

LAYERS = ["bench_ci", "tools", "pipeline", "cli"]

# Third-party clients stay in the adapters; pipeline/ talks to them through tools/.
ADAPTER_ONLY = {"requests", "boto3", "botocore"}


def imported_roots(py_file: Path) -> Set[str]:
    tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    roots: Set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            roots.update(alias.name.partition(".")[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            roots.add(node.module.partition(".")[0])
    return roots


def sources(layer: str) -> List[Path]:
    return sorted(p for p in (REPO_ROOT / layer).rglob("*.py") if "__pycache__" not in p.parts)


@pytest.mark.parametrize("layer", LAYERS)
def test_layer_only_imports_lower_layers(layer: str) -> None:
    higher = set(LAYERS[LAYERS.index(layer) + 1 :])
    files = sources(layer)
    assert files, f"no sources under {layer}/"

    problems = []
    for py_file in files:
        bad = sorted(imported_roots(py_file) & higher)
        if bad:
            problems.append(f"{py_file.relative_to(REPO_ROOT)} imports {bad}")
    assert not problems, "\n".join(problems)


@pytest.mark.parametrize("layer", ["bench_ci", "pipeline", "cli"])
def test_http_and_storage_clients_stay_in_tools(layer: str) -> None:
    problems = []
    for py_file in sources(layer):
        bad = sorted(imported_roots(py_file) & ADAPTER_ONLY)
        if bad:
            problems.append(f"{py_file.relative_to(REPO_ROOT)} imports {bad}")
    assert not problems, "\n".join(problems)
