"""Architectural tests for the task document store.

Static, file/AST-based checks that keep persistence concerns inside the
document store and keep the command registry complete. These tests read
source files only and do not execute application code.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterable, Set

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]
PKG_DIR = PROJECT_ROOT / "taskboard"
OPERATION_MODULES = [
    PKG_DIR / "logic" / "folder_operations.py",
    PKG_DIR / "logic" / "task_operations.py",
    PKG_DIR / "logic" / "lookup.py",
    PKG_DIR / "commands.py",
]
FILESYSTEM_NAMES = {"open", "os", "pathlib", "shutil", "tempfile", "json"}
SHELL_COMMANDS = {
    "fetch_task_data",
    "create_folder",
    "create_task",
    "complete_task",
    "delete_task",
    "move_task_to_folder",
    "edit_task",
    "toggle_visability_folder",
    "delete_tasks_folder",
    "duplicate_task",
    "duplicate_folder",
    "move_task_order",
    "edit_folder",
    "resize_folder",
    "move_folder",
    "change_folder_zindex",
}


def _parse_ast(path: Path) -> ast.AST:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except FileNotFoundError:
        pytest.fail(f"Expected file is missing: {path}")
    except SyntaxError as exc:
        pytest.fail(f"Failed to parse {path}: {exc}")


def _imported_roots(tree: ast.AST) -> Set[str]:
    roots: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            roots.update(alias.name.split(".")[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            roots.add(node.module.split(".")[0])
    return roots


def _called_names(tree: ast.AST) -> Iterable[str]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Call):
            if isinstance(node.func, ast.Name):
                yield node.func.id
            elif isinstance(node.func, ast.Attribute):
                yield node.func.attr


@pytest.mark.parametrize("module_path", OPERATION_MODULES, ids=lambda p: p.name)
def test_operations_do_not_touch_the_filesystem(module_path: Path) -> None:
    """Only the document store may read or write the backing file."""
    tree = _parse_ast(module_path)
    offending = _imported_roots(tree) & FILESYSTEM_NAMES
    assert not offending, f"{module_path.name} imports filesystem modules: {sorted(offending)}"
    assert "open" not in set(_called_names(tree)), f"{module_path.name} calls open()"


def test_store_replaces_file_atomically() -> None:
    tree = _parse_ast(PKG_DIR / "logic" / "document_store.py")
    calls = set(_called_names(tree))
    assert "replace" in calls, "DocumentStore.save must move the temp file with os.replace"
    assert "fsync" in calls, "DocumentStore.save must fsync the temp file before replacing"
    assert "chmod" in calls, "DocumentStore.save must carry the target file mode onto the temp file"
    assert "write_text" not in calls and "write_bytes" not in calls, (
        "DocumentStore must not write the target file in place"
    )


def test_mutations_run_inside_store_transactions() -> None:
    """Every public mutation opens exactly one transaction."""
    for module_path in OPERATION_MODULES[:2]:
        tree = _parse_ast(module_path)
        for fn in getattr(tree, "body", []):
            if not isinstance(fn, ast.FunctionDef) or fn.name.startswith("_"):
                continue
            transactions = [
                n
                for n in ast.walk(fn)
                if isinstance(n, ast.Call) and isinstance(n.func, ast.Attribute) and n.func.attr == "transaction"
            ]
            assert len(transactions) == 1, f"{module_path.name}:{fn.name} must use one store.transaction()"


def test_every_shell_command_is_registered() -> None:
    tree = _parse_ast(PKG_DIR / "commands.py")
    registered: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name) and node.target.id == "COMMANDS":
            assert isinstance(node.value, ast.Dict)
            registered = {k.value for k in node.value.keys if isinstance(k, ast.Constant)}
    missing = SHELL_COMMANDS - registered
    assert not missing, f"Commands missing from registry: {sorted(missing)}"


def test_error_codes_are_mapped_centrally() -> None:
    errors_tree = _parse_ast(PKG_DIR / "errors.py")
    codes: set[str] = set()
    for node in ast.walk(errors_tree):
        if isinstance(node, ast.Assign) and any(isinstance(t, ast.Name) and t.id == "code" for t in node.targets):
            if isinstance(node.value, ast.Constant):
                codes.add(node.value.value)
    mapping_src = (PKG_DIR / "error_mapping.py").read_text(encoding="utf-8")
    unmapped = {c for c in codes if c != "TASKBOARD_ERROR" and f'"{c}"' not in mapping_src}
    assert not unmapped, f"Error codes without a problem mapping: {sorted(unmapped)}"
