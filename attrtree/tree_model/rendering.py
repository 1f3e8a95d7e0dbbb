"""Visible-row projection and plain-text formatting for tree rows."""

from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass

from .types import Folder, Tree


@dataclass(frozen=True)
class TreeRow:
    """One visible row: a folder or a leaf at a given depth."""

    node_id: str
    depth: int
    is_folder: bool
    parent_id: str | None
    index: int
    display: str
    locked: bool = False


def build_visible_rows(tree: Tree, expanded: Set[str]) -> list[TreeRow]:
    """Flatten ``tree`` into display rows, descending only into expanded folders.

    Collapsed folders still produce their own row; their children are hidden.
    """
    rows: list[TreeRow] = []

    def walk(folder: Folder, depth: int) -> None:
        for idx, child in enumerate(folder.children):
            if isinstance(child, Folder):
                rows.append(TreeRow(child.id, depth, True, folder.id, idx, child.name))
                if child.id in expanded:
                    walk(child, depth + 1)
            else:
                rows.append(
                    TreeRow(child.id, depth, False, folder.id, idx, child.display_label, locked=child.locked)
                )

    for idx, folder in enumerate(tree.folders):
        rows.append(TreeRow(folder.id, 0, True, None, idx, folder.name))
        if folder.id in expanded:
            walk(folder, 1)
    return rows


def format_tree_row(
    row: TreeRow,
    expanded: Set[str],
    selected: Set[str],
    dragging_id: str | None = None,
) -> str:
    """Render one row as indented text with expand/check/lock markers."""
    if row.is_folder:
        indent = "  " * row.depth
        marker = "▾ " if row.node_id in expanded else "▸ "
        return f"{indent}{marker}{row.display}/"

    # Leaves align under the parent folder arrow column.
    indent = "  " * max(0, row.depth - 1) + "  "
    check = "[x]" if row.node_id in selected else "[ ]"
    suffix = " (locked)" if row.locked else ""
    drag = " <drag>" if row.node_id == dragging_id else ""
    return f"{indent}{check} {row.display}{suffix}{drag}"


__all__ = [
    "TreeRow",
    "build_visible_rows",
    "format_tree_row",
]
