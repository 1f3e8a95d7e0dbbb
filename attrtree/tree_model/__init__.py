"""Tree-model datatypes, construction, indexing, and row projection.

Defines the immutable ``Tree``/``Folder``/``AttributeLeaf`` nodes plus id
lookup and structural-sharing update helpers used by the store and planner.
Also flattens trees into visible rows for presentation adapters.
"""

from __future__ import annotations

from .build import build_tree, node_from_record, node_to_record, tree_to_records
from .index import TreeIndex, build_index, folder_at_path, iter_nodes, replace_folder_children
from .rendering import TreeRow, build_visible_rows, format_tree_row
from .types import AttributeLeaf, Folder, NodeLocation, Tree, TreeNode, TreeStructureError, is_movable

__all__ = [
    "AttributeLeaf",
    "Folder",
    "Tree",
    "TreeNode",
    "NodeLocation",
    "TreeStructureError",
    "is_movable",
    "TreeIndex",
    "build_index",
    "iter_nodes",
    "replace_folder_children",
    "folder_at_path",
    "build_tree",
    "node_from_record",
    "node_to_record",
    "tree_to_records",
    "TreeRow",
    "build_visible_rows",
    "format_tree_row",
]
