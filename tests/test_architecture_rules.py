"""Architecture enforcement tests for the layer boundaries of ``mugin_providers``.

Import graph (inward only):

- ``base`` (models, codec, accumulator, adapter base) imports nothing from
  the vendor packages, the service or the client.
- Vendor packages (``openai``, ``mistral``, ``ollama``) may use ``base`` and
  ``config`` but never the service or the client.
- The client (session orchestrator) never imports the service or a vendor
  package: it only speaks the wire format.

These tests are static scans (``ast``) of the source tree so they run without
importing vendor SDKs, and they report every offending import at once.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

import pytest

PACKAGE = "mugin_providers"
PACKAGE_ROOT = Path(__file__).resolve().parent.parent / PACKAGE
VENDORS = ("openai", "mistral", "ollama")


def _iter_python_files(root: Path) -> Iterable[Path]:
    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts or "tests" in path.relative_to(PACKAGE_ROOT).parts:
            continue
        yield path


def _module_parts(path: Path) -> List[str]:
    rel = path.relative_to(PACKAGE_ROOT.parent).with_suffix("")
    parts = list(rel.parts)
    if parts[-1] == "__init__":
        parts.pop()
    return parts


def _imported_modules(path: Path) -> Iterator[Tuple[int, str]]:
    """Yield ``(lineno, absolute module name)`` for every import in ``path``."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    parts = _module_parts(path)
    package = parts if path.name == "__init__.py" else parts[:-1]
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                anchor = package[: len(package) - node.level + 1]
                base = ".".join(anchor + ([node.module] if node.module else []))
            else:
                base = node.module or ""
            yield node.lineno, base
            for alias in node.names:
                yield node.lineno, f"{base}.{alias.name}"


def _offenders(layer: str, forbidden: Iterable[str]) -> List[str]:
    root = PACKAGE_ROOT / layer
    banned = tuple(f"{PACKAGE}.{name}" for name in forbidden)
    found = []
    for py in _iter_python_files(root):
        for lineno, module in _imported_modules(py):
            if any(module == b or module.startswith(b + ".") for b in banned):
                found.append(f"{py.relative_to(PACKAGE_ROOT.parent)}:{lineno} imports {module}")
    return sorted(set(found))


def test_base_does_not_import_outer_layers() -> None:
    offenders = _offenders("base", ("service", "client", *VENDORS))
    if offenders:
        pytest.fail("base must stay independent of vendors, service and client:\n" + "\n".join(offenders))


@pytest.mark.parametrize("vendor", VENDORS)
def test_vendor_packages_do_not_import_service_or_client(vendor: str) -> None:
    others = tuple(v for v in VENDORS if v != vendor)
    offenders = _offenders(vendor, ("service", "client", *others))
    if offenders:
        pytest.fail(f"{vendor} must only depend on base and config:\n" + "\n".join(offenders))


def test_client_only_speaks_the_wire_format() -> None:
    offenders = _offenders("client", ("service", *VENDORS))
    if offenders:
        pytest.fail("client must not import the service or vendor packages:\n" + "\n".join(offenders))
