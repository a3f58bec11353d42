"""Architectural fitness functions keeping the layers pointed inward.

core/ holds models, ports and configuration; services/ depends on core only;
adapters/ implement ports; apps/ and cli/ are the outer surfaces.
"""

import re
from pathlib import Path

PACKAGE_DIR = Path(__file__).parent.parent / "scripture_engine"


def _imports(layer: str, pattern: str) -> list[str]:
    regex = re.compile(pattern, re.MULTILINE)
    return [
        str(py_file.relative_to(PACKAGE_DIR))
        for py_file in (PACKAGE_DIR / layer).rglob("*.py")
        if regex.search(py_file.read_text(encoding="utf-8"))
    ]


def test_no_python_modules_at_root():
    """Only packaging and test configuration may live at the repository root."""
    root = Path(__file__).parent.parent
    allowed = {"setup.py", "conftest.py", "main.py", "__main__.py"}
    violations = [f.name for f in root.glob("*.py") if f.name not in allowed]
    assert not violations, f"Unexpected Python modules at root: {violations}"


def test_core_does_not_import_outer_layers():
    """Core must not reach into services, adapters or the HTTP/CLI surfaces."""
    violations = _imports(
        "core", r"^\s*(from|import) scripture_engine\.(services|adapters|apps|cli)\b"
    )
    assert not violations, f"Core imports outer layers: {violations}"


def test_no_fastapi_in_core_or_services():
    """Core and services stay framework-agnostic."""
    pattern = r"^\s*(from|import) (fastapi|starlette)\b"
    violations = _imports("core", pattern) + _imports("services", pattern)
    assert not violations, f"Framework imports found: {violations}"


def test_services_do_not_import_adapters_or_http_clients():
    """Services talk to raw-text sources through core.ports.TextSourcePort."""
    violations = _imports(
        "services", r"^\s*(from|import) (scripture_engine\.(adapters|apps|cli)|httpx)\b"
    )
    assert not violations, f"Services import infrastructure directly: {violations}"
