from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

# High-level orchestrator modules.
# LOW-level code (core/engine/errors/options/fileio) must NEVER import these.
ORCH_PREFIXES: tuple[str, ...] = (
    "ruffman.__main__",
    "ruffman.cli",
    "ruffman.verify",
)

# The codec primitives must not depend on the container/engine layer either.
CORE_PREFIX = "ruffman.core"
ENGINE_PREFIX = "ruffman.engine"

PACKAGE_ROOT = "ruffman"


@dataclass(frozen=True)
class ImportEdge:
    src: str
    dst: str
    file: Path
    lineno: int


def _has_prefix(mod: str, prefix: str) -> bool:
    return mod == prefix or mod.startswith(prefix + ".")


def _is_orch(mod: str) -> bool:
    return any(_has_prefix(mod, p) for p in ORCH_PREFIXES)


def _module_name_from_path(src_dir: Path, py_file: Path) -> str | None:
    try:
        rel = py_file.relative_to(src_dir)
    except ValueError:
        return None

    parts = list(rel.parts)
    if not parts or parts[0] != PACKAGE_ROOT:
        return None

    if py_file.name == "__init__.py":
        parts = parts[:-1]
    else:
        parts[-1] = py_file.stem

    if not parts:
        return None
    return ".".join(parts)


def _resolve_relative(current_mod: str, level: int, module: str | None, is_pkg: bool) -> str | None:
    if level <= 0:
        return module

    base = current_mod.split(".")
    if not is_pkg:
        base = base[:-1]  # package of current module

    if level - 1 > len(base):
        return None
    base = base[: len(base) - level + 1]

    if module:
        return ".".join(base + module.split("."))
    return ".".join(base)


def _iter_import_edges(src_dir: Path) -> Iterable[ImportEdge]:
    for py in src_dir.rglob("*.py"):
        mod = _module_name_from_path(src_dir, py)
        if not mod:
            continue

        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        is_pkg = py.name == "__init__.py"

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if _has_prefix(alias.name, PACKAGE_ROOT):
                        yield ImportEdge(src=mod, dst=alias.name, file=py, lineno=node.lineno)

            elif isinstance(node, ast.ImportFrom):
                if node.module is None and node.level == 0:
                    continue
                abs_mod = _resolve_relative(mod, node.level, node.module, is_pkg)
                if abs_mod and _has_prefix(abs_mod, PACKAGE_ROOT):
                    yield ImportEdge(src=mod, dst=abs_mod, file=py, lineno=node.lineno)


def _src_dir() -> Path:
    src_dir = Path(__file__).resolve().parents[1] / "src"
    if not src_dir.is_dir():
        raise AssertionError(f"Expected src/ directory at: {src_dir}")
    return src_dir


def _report(title: str, violations: list[ImportEdge]) -> None:
    if not violations:
        return
    lines = [title]
    for v in sorted(violations, key=lambda e: (str(e.file), e.lineno, e.src, e.dst)):
        lines.append(f"  {v.file}:{v.lineno}  {v.src}  ->  {v.dst}")
    lines.append("")
    lines.append("Fix: move high-level logic out of LOW modules, or invert the dependency.")
    raise AssertionError("\n".join(lines))


def test_no_low_level_imports_orchestrator() -> None:
    """
    Hard dependency direction:
      ORCH (__main__, cli, verify) -> may depend on LOW
      LOW                -> must NOT depend on ORCH
    """
    violations = [
        e
        for e in _iter_import_edges(_src_dir())
        if e.src != e.dst and not _is_orch(e.src) and _is_orch(e.dst)
    ]
    _report("Forbidden imports detected (LOW -> ORCH):", violations)


def test_core_does_not_import_engine() -> None:
    violations = [
        e
        for e in _iter_import_edges(_src_dir())
        if _has_prefix(e.src, CORE_PREFIX) and _has_prefix(e.dst, ENGINE_PREFIX)
    ]
    _report("Forbidden imports detected (core -> engine):", violations)


def test_entry_points_are_orchestrators() -> None:
    src_dir = _src_dir()
    cli_importers = {
        e.src for e in _iter_import_edges(src_dir) if _has_prefix(e.dst, "ruffman.cli")
    }
    assert "ruffman.__main__" in cli_importers
    assert all(_is_orch(m) for m in cli_importers)
