"""Tree construction from plain records and conversion back.

Records are the nested dict shape a data source hands over after fetching:
folders carry ``children``; leaves carry ``label``/``name``/``locked``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .index import build_index
from .types import AttributeLeaf, Folder, Tree, TreeNode, TreeStructureError


def _require_id(record: Mapping[str, object]) -> str:
    node_id = record.get("id")
    if not isinstance(node_id, str) or not node_id:
        raise TreeStructureError(f"node id must be a non-empty string: {node_id!r}")
    return node_id


def _optional_str(record: Mapping[str, object], key: str) -> str | None:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TreeStructureError(f"{key!r} must be a string for node {record.get('id')!r}")
    return value


def node_from_record(record: object) -> TreeNode:
    """Convert one record (and its descendants) to a tree node."""
    if not isinstance(record, Mapping):
        raise TreeStructureError(f"tree record must be a mapping, got {type(record).__name__}")
    node_id = _require_id(record)

    if "children" in record:
        raw_children = record.get("children")
        if not isinstance(raw_children, (list, tuple)):
            raise TreeStructureError(f"children of folder {node_id!r} must be a list")
        return Folder(
            id=node_id,
            name=_optional_str(record, "name") or "",
            children=tuple(node_from_record(child) for child in raw_children),
        )

    locked = record.get("locked", False)
    if not isinstance(locked, bool):
        raise TreeStructureError(f"'locked' must be a boolean for leaf {node_id!r}")
    return AttributeLeaf(
        id=node_id,
        label=_optional_str(record, "label"),
        name=_optional_str(record, "name") or "",
        locked=locked,
    )


def build_tree(records: Iterable[object]) -> Tree:
    """Build and validate a tree from top-level folder records.

    Raises ``TreeStructureError`` for leaves at the root, malformed records,
    or ids shared by more than one node.
    """
    folders: list[Folder] = []
    for record in records:
        node = node_from_record(record)
        if not isinstance(node, Folder):
            raise TreeStructureError(f"top-level entry {node.id!r} must be a folder")
        folders.append(node)
    tree = Tree(folders=tuple(folders))
    build_index(tree)
    return tree


def node_to_record(node: TreeNode) -> dict[str, object]:
    """Convert one node (and descendants) back to its record shape."""
    if isinstance(node, Folder):
        return {
            "id": node.id,
            "name": node.name,
            "children": [node_to_record(child) for child in node.children],
        }
    return {
        "id": node.id,
        "label": node.label,
        "name": node.name,
        "locked": node.locked,
    }


def tree_to_records(tree: Tree) -> list[dict[str, object]]:
    """Convert a tree to a JSON-serializable list of folder records."""
    return [node_to_record(folder) for folder in tree.folders]


__all__ = [
    "node_from_record",
    "build_tree",
    "node_to_record",
    "tree_to_records",
]
