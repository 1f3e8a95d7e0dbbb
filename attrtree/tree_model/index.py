"""Id index over a tree plus structural-sharing update helpers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace

from .types import AttributeLeaf, Folder, NodeLocation, Tree, TreeNode, TreeStructureError


@dataclass(frozen=True)
class TreeIndex:
    """Id lookup tables built once per tree snapshot."""

    locations: dict[str, NodeLocation]
    nodes: dict[str, TreeNode]

    def folder(self, folder_id: object) -> Folder | None:
        node = self.nodes.get(folder_id) if isinstance(folder_id, str) else None
        return node if isinstance(node, Folder) else None

    def leaf(self, leaf_id: object) -> AttributeLeaf | None:
        node = self.nodes.get(leaf_id) if isinstance(leaf_id, str) else None
        return node if isinstance(node, AttributeLeaf) else None

    def location(self, node_id: object) -> NodeLocation | None:
        if not isinstance(node_id, str):
            return None
        return self.locations.get(node_id)

    def folder_ids(self) -> frozenset[str]:
        return frozenset(node_id for node_id, node in self.nodes.items() if isinstance(node, Folder))

    def leaf_ids(self) -> frozenset[str]:
        return frozenset(node_id for node_id, node in self.nodes.items() if isinstance(node, AttributeLeaf))


def iter_nodes(tree: Tree) -> Iterator[tuple[TreeNode, NodeLocation]]:
    """Yield every node with its location in depth-first display order."""

    def walk(folder: Folder, path: tuple[str, ...]) -> Iterator[tuple[TreeNode, NodeLocation]]:
        child_path = path + (folder.id,)
        for idx, child in enumerate(folder.children):
            yield child, NodeLocation(child.id, folder.id, idx, child_path)
            if isinstance(child, Folder):
                yield from walk(child, child_path)

    for idx, folder in enumerate(tree.folders):
        yield folder, NodeLocation(folder.id, None, idx, ())
        yield from walk(folder, ())


def build_index(tree: Tree) -> TreeIndex:
    """Index all nodes by id, rejecting duplicate ids (no node aliasing)."""
    locations: dict[str, NodeLocation] = {}
    nodes: dict[str, TreeNode] = {}
    for node, location in iter_nodes(tree):
        if node.id in nodes:
            raise TreeStructureError(f"duplicate node id: {node.id!r}")
        nodes[node.id] = node
        locations[node.id] = location
    return TreeIndex(locations=locations, nodes=nodes)


def replace_folder_children(
    tree: Tree,
    folder_path: tuple[str, ...],
    children: tuple[TreeNode, ...],
) -> Tree:
    """Return a tree where the folder at ``folder_path`` holds ``children``.

    ``folder_path`` runs from a top-level folder id down to the target folder.
    Only folders along the path are rebuilt; every other branch is shared.
    """
    if not folder_path:
        raise TreeStructureError("folder path must not be empty")

    def rebuild(folder: Folder, remaining: tuple[str, ...]) -> Folder:
        if not remaining:
            return replace(folder, children=children)
        next_id = remaining[0]
        for idx, child in enumerate(folder.children):
            if isinstance(child, Folder) and child.id == next_id:
                updated = list(folder.children)
                updated[idx] = rebuild(child, remaining[1:])
                return replace(folder, children=tuple(updated))
        raise TreeStructureError(f"folder not found on path: {next_id!r}")

    top_id = folder_path[0]
    for idx, folder in enumerate(tree.folders):
        if folder.id == top_id:
            folders = list(tree.folders)
            folders[idx] = rebuild(folder, folder_path[1:])
            return Tree(folders=tuple(folders))
    raise TreeStructureError(f"folder not found on path: {top_id!r}")


def folder_at_path(tree: Tree, folder_path: tuple[str, ...]) -> Folder:
    """Return the folder reached by walking ``folder_path`` from the root."""
    if not folder_path:
        raise TreeStructureError("folder path must not be empty")
    candidates: tuple[TreeNode, ...] = tree.folders
    found: Folder | None = None
    for folder_id in folder_path:
        found = next(
            (child for child in candidates if isinstance(child, Folder) and child.id == folder_id),
            None,
        )
        if found is None:
            raise TreeStructureError(f"folder not found on path: {folder_id!r}")
        candidates = found.children
    assert found is not None
    return found


__all__ = [
    "TreeIndex",
    "iter_nodes",
    "build_index",
    "replace_folder_children",
    "folder_at_path",
]
