"""Pure drag-and-drop move planning.

``plan`` validates a proposed move of one leaf and, when legal, returns the
resulting tree. It never mutates its input and holds no state of its own.

Placement rule: only unlocked leaves are movable; locked leaves and nested
folders are pinned. A requested drop index is read as a position among the
movable entries of the destination folder. The leaf lands immediately after
the ``k``-th movable entry that preceded the requested index (or at the front
when ``k == 0``), so a drop never splits pinned entries apart and their
relative order is unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ErrorKind
from ..tree_model.index import TreeIndex, build_index, folder_at_path, replace_folder_children
from ..tree_model.types import AttributeLeaf, Folder, Tree, TreeNode, is_movable


@dataclass(frozen=True)
class DragSource:
    """Leaf being moved and the ``(parent_id, index)`` it was picked up from."""

    leaf_id: str
    parent_id: str
    index: int


@dataclass(frozen=True)
class DropTarget:
    """Requested insertion point: folder id and index in ``[0, len(children)]``."""

    parent_id: object
    index: object


@dataclass(frozen=True)
class PlanAccepted:
    """Successful plan: the new tree plus where the leaf ended up."""

    tree: Tree
    leaf_id: str
    from_parent_id: str
    from_index: int
    to_parent_id: str
    to_index: int

    ok = True

    @property
    def noop(self) -> bool:
        return self.from_parent_id == self.to_parent_id and self.from_index == self.to_index


@dataclass(frozen=True)
class PlanRejected:
    """Rejected plan; the input tree stays authoritative."""

    reason: ErrorKind
    message: str

    ok = False


PlanResult = PlanAccepted | PlanRejected


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _folder_path(index: TreeIndex, folder_id: str) -> tuple[str, ...]:
    location = index.locations[folder_id]
    return location.folder_path + (folder_id,)


def movable_count_before(children: tuple[TreeNode, ...], position: int, moving_id: str) -> int:
    """Count movable entries in ``children[:position]``, ignoring ``moving_id``."""
    return sum(1 for child in children[:position] if child.id != moving_id and is_movable(child))


def insertion_index_after_movable(children: tuple[TreeNode, ...], movable_count: int) -> int:
    """Return the slot directly after the ``movable_count``-th movable child.

    ``0`` means the front of the folder. Counts beyond the number of movable
    children clamp to the slot after the last movable child.
    """
    if movable_count <= 0:
        return 0
    seen = 0
    slot = 0
    for idx, child in enumerate(children):
        if is_movable(child):
            seen += 1
            slot = idx + 1
            if seen == movable_count:
                return slot
    return slot


def plan(
    tree: Tree,
    source: DragSource,
    target: DropTarget,
    *,
    index: TreeIndex | None = None,
) -> PlanResult:
    """Validate and compute a leaf move; all-or-nothing.

    ``index`` may be passed when the caller already holds one for ``tree``.
    """
    tree_index = index if index is not None else build_index(tree)

    destination = tree_index.folder(target.parent_id)
    if destination is None:
        return PlanRejected(ErrorKind.TARGET_NOT_FOUND, f"drop target folder not found: {target.parent_id!r}")
    if not _is_index(target.index) or not 0 <= target.index <= len(destination.children):
        return PlanRejected(
            ErrorKind.INVALID_INDEX,
            f"drop index {target.index!r} outside 0..{len(destination.children)} for folder {destination.id!r}",
        )

    origin = tree_index.folder(source.parent_id)
    if (
        origin is None
        or not _is_index(source.index)
        or not 0 <= source.index < len(origin.children)
        or origin.children[source.index].id != source.leaf_id
        or not isinstance(origin.children[source.index], AttributeLeaf)
    ):
        return PlanRejected(
            ErrorKind.SOURCE_NOT_FOUND,
            f"leaf {source.leaf_id!r} not found at {source.parent_id!r}[{source.index!r}]",
        )
    leaf = origin.children[source.index]
    assert isinstance(leaf, AttributeLeaf)
    if leaf.locked:
        return PlanRejected(ErrorKind.SOURCE_LOCKED, f"leaf {leaf.id!r} is locked")

    same_folder = destination.id == origin.id
    if same_folder and target.index in (source.index, source.index + 1):
        return PlanAccepted(tree, leaf.id, origin.id, source.index, origin.id, source.index)

    movable_before = movable_count_before(destination.children, target.index, leaf.id)
    origin_children = origin.children[: source.index] + origin.children[source.index + 1 :]
    destination_path = _folder_path(tree_index, destination.id)

    updated = tree
    if same_folder:
        base_children = origin_children
    else:
        updated = replace_folder_children(updated, _folder_path(tree_index, origin.id), origin_children)
        # The origin may sit inside the destination, so read it back after removal.
        base_children = folder_at_path(updated, destination_path).children
    slot = insertion_index_after_movable(base_children, movable_before)
    destination_children = base_children[:slot] + (leaf,) + base_children[slot:]
    updated = replace_folder_children(updated, destination_path, destination_children)

    if same_folder and slot == source.index:
        updated = tree
    return PlanAccepted(updated, leaf.id, origin.id, source.index, destination.id, slot)


def pinned_order(folder: Folder) -> tuple[str, ...]:
    """Ids of pinned children in display order."""
    return tuple(child.id for child in folder.children if not is_movable(child))


__all__ = [
    "DragSource",
    "DropTarget",
    "PlanAccepted",
    "PlanRejected",
    "PlanResult",
    "movable_count_before",
    "insertion_index_after_movable",
    "plan",
    "pinned_order",
]
