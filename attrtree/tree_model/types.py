"""Domain datatypes for folder/attribute trees."""

from __future__ import annotations

from dataclasses import dataclass


class TreeStructureError(ValueError):
    """Raised when caller-supplied tree data cannot form a valid tree."""


@dataclass(frozen=True)
class AttributeLeaf:
    """Selectable attribute item; ``locked`` leaves are system-defined and never move."""

    id: str
    label: str | None = None
    name: str = ""
    locked: bool = False

    @property
    def display_label(self) -> str:
        """Return ``label`` when present, otherwise the internal ``name``."""
        return self.label if self.label else self.name

    @property
    def movable(self) -> bool:
        return not self.locked


@dataclass(frozen=True)
class Folder:
    """Expandable container with ordered, recursively nested children."""

    id: str
    name: str
    children: tuple["TreeNode", ...] = ()


TreeNode = Folder | AttributeLeaf


@dataclass(frozen=True)
class Tree:
    """Root of the hierarchy: an ordered sequence of top-level folders."""

    folders: tuple[Folder, ...] = ()


@dataclass(frozen=True)
class NodeLocation:
    """Position of one node: owning folder id and index among its siblings.

    Top-level folders have ``parent_id=None`` and index into ``Tree.folders``.
    ``folder_path`` lists ancestor folder ids from the root down to the parent.
    """

    node_id: str
    parent_id: str | None
    index: int
    folder_path: tuple[str, ...] = ()


def is_movable(node: TreeNode) -> bool:
    """Only unlocked leaves may be dragged; folders and locked leaves are pinned."""
    return isinstance(node, AttributeLeaf) and node.movable


__all__ = [
    "TreeStructureError",
    "AttributeLeaf",
    "Folder",
    "TreeNode",
    "Tree",
    "NodeLocation",
    "is_movable",
]
