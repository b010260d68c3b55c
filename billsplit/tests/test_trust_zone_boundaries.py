"""Trust-zone dependency rules between billsplit packages.

Pure zones (bill parsing and models) take strings and return values; they
never reach the network, the filesystem, the environment or the logging
setup. Privileged zones own those side effects. Orchestrators glue both.
"""

from __future__ import annotations

import ast
import importlib.util
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
_ZONES: dict[tuple[str, ...], str] = {
    ("domain",): "Pure",
    ("receipt",): "Pure",
    ("runtime",): "Privileged",
    ("application",): "Orchestrator",
    ("cli",): "Orchestrator",
}
_ALLOWED_TARGET_ZONES = {
    "Privileged": {"Privileged", "Pure"},
    "Orchestrator": {"Privileged", "Orchestrator", "Pure"},
    "Pure": {"Pure"},
}
# Third-party I/O stacks that must stay out of the pure zones
_PURE_FORBIDDEN_LIBRARIES = ("fastapi", "httpx", "uvicorn", "logging")


def _zone_for_parts(parts: tuple[str, ...]) -> str | None:
    for prefix, zone in sorted(_ZONES.items(), key=lambda item: len(item[0]), reverse=True):
        if parts[: len(prefix)] == prefix:
            return zone
    return None


def _module_name_for_file(path: Path) -> str:
    parts = list(path.relative_to(_ROOT).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(["billsplit", *parts])


def _imported_modules(path: Path) -> list[str]:
    module_name = _module_name_for_file(path)
    current_package = module_name if path.name == "__init__.py" else module_name.rsplit(".", 1)[0]
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))

    imports: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level == 0:
                if node.module:
                    imports.append(node.module)
                continue

            rel_name = "." * node.level + (node.module or "")
            try:
                imports.append(importlib.util.resolve_name(rel_name, current_package))
            except ImportError:
                continue
    return imports


def _zone_files(zone: str) -> list[Path]:
    files: list[Path] = []
    for parts, zone_name in _ZONES.items():
        if zone_name == zone:
            files.extend((_ROOT / Path(*parts)).rglob("*.py"))
    return sorted(files)


def test_trust_zone_paths_exist() -> None:
    missing = [str(Path(*parts)) for parts in _ZONES if not (_ROOT / Path(*parts)).is_dir()]

    assert not missing, "Trust-zone paths do not exist:\n" + "\n".join(sorted(missing))


def test_trust_zone_import_boundaries() -> None:
    violations: list[str] = []

    for zone in _ALLOWED_TARGET_ZONES:
        for path in _zone_files(zone):
            rel = path.relative_to(_ROOT)
            for module in _imported_modules(path):
                if not module.startswith("billsplit."):
                    continue
                target_zone = _zone_for_parts(tuple(module.split(".")[1:]))
                if target_zone is None:
                    continue
                if target_zone not in _ALLOWED_TARGET_ZONES[zone]:
                    violations.append(f"{rel}: {zone} imports {module} ({target_zone})")

    assert not violations, "Trust-zone import violations:\n" + "\n".join(violations)


def test_pure_zones_do_not_import_io_libraries() -> None:
    violations: list[str] = []

    for path in _zone_files("Pure"):
        for module in _imported_modules(path):
            top_level = module.split(".", 1)[0]
            if top_level in _PURE_FORBIDDEN_LIBRARIES:
                violations.append(f"{path.relative_to(_ROOT)}: {module}")

    assert not violations, "Pure zone I/O imports:\n" + "\n".join(violations)
