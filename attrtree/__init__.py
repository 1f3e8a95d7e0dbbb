"""Public package surface for attrtree.

Re-exports the tree store, planner entry point, and tree-model types.
``main`` is exposed for programmatic CLI invocation.
"""

from __future__ import annotations

from .errors import ErrorKind
from .reorder import DragSource, DropTarget, PlanAccepted, PlanRejected, plan
from .store import AppliedMove, CommandResult, DragSession, SelectionMode, TreeSnapshot, TreeStore
from .tree_model import AttributeLeaf, Folder, Tree, TreeStructureError, build_tree, tree_to_records


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "main",
    "ErrorKind",
    "TreeStore",
    "TreeSnapshot",
    "SelectionMode",
    "DragSession",
    "AppliedMove",
    "CommandResult",
    "DragSource",
    "DropTarget",
    "PlanAccepted",
    "PlanRejected",
    "plan",
    "AttributeLeaf",
    "Folder",
    "Tree",
    "TreeStructureError",
    "build_tree",
    "tree_to_records",
]
