"""Stateful tree store: structure, expansion, selection, and drag sessions.

Every command runs to completion synchronously and reports its outcome as a
``CommandResult``; a rejected command leaves all state untouched. Expansion,
selection, and tree structure are independent axes: no command on one of
them changes another.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..errors import ErrorKind
from ..reorder import DragSource, DropTarget, PlanRejected, PlanResult, plan
from ..tree_model.build import build_tree
from ..tree_model.index import TreeIndex, build_index
from ..tree_model.rendering import TreeRow, build_visible_rows
from ..tree_model.types import NodeLocation, Tree, TreeNode, TreeStructureError
from .state import AppliedMove, CommandResult, DragSession, SelectionMode, TreeSnapshot

logger = logging.getLogger(__name__)


def _coerce_mode(mode: SelectionMode | str | None, default: SelectionMode) -> SelectionMode | None:
    if mode is None:
        return default
    try:
        return SelectionMode(mode)
    except ValueError:
        return None


class TreeStore:
    """Single owner of one attribute tree and its UI state.

    Presentation adapters share one instance, forward gestures as commands,
    and re-render from ``snapshot()`` afterwards.
    """

    def __init__(
        self,
        tree: Tree,
        *,
        expanded: Iterable[str] = (),
        selected: Iterable[str] = (),
        selection_mode: SelectionMode | str = SelectionMode.MULTI,
    ) -> None:
        """Create a store over ``tree`` with optional seeded UI state.

        Raises ``TreeStructureError`` when the tree has duplicate ids or the
        seeds reference unknown folders/leaves.
        """
        self._index = build_index(tree)
        self._tree = tree
        try:
            self._mode = SelectionMode(selection_mode)
        except ValueError as exc:
            raise TreeStructureError(f"unknown selection mode: {selection_mode!r}") from exc

        expanded_ids = frozenset(expanded)
        unknown_folders = sorted(str(folder_id) for folder_id in expanded_ids if self._index.folder(folder_id) is None)
        if unknown_folders:
            raise TreeStructureError(f"expanded ids are not folders: {', '.join(unknown_folders)}")

        selected_ids = frozenset(selected)
        unknown_leaves = sorted(str(leaf_id) for leaf_id in selected_ids if self._index.leaf(leaf_id) is None)
        if unknown_leaves:
            raise TreeStructureError(f"selected ids are not leaves: {', '.join(unknown_leaves)}")
        if self._mode is SelectionMode.SINGLE and len(selected_ids) > 1:
            raise TreeStructureError("single selection mode allows at most one selected leaf")

        self._expanded = expanded_ids
        self._selected = selected_ids
        self._drag: DragSession | None = None

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, object]], **kwargs) -> TreeStore:
        """Build a store from plain folder records (see ``build_tree``)."""
        return cls(build_tree(records), **kwargs)

    # Queries

    def snapshot(self) -> TreeSnapshot:
        return TreeSnapshot(
            tree=self._tree,
            expanded=self._expanded,
            selected=self._selected,
            selection_mode=self._mode,
            drag=self._drag,
        )

    @property
    def selection_mode(self) -> SelectionMode:
        return self._mode

    @property
    def drag_session(self) -> DragSession | None:
        return self._drag

    @property
    def index(self) -> TreeIndex:
        return self._index

    def node(self, node_id: object) -> TreeNode | None:
        if not isinstance(node_id, str):
            return None
        return self._index.nodes.get(node_id)

    def locate(self, node_id: object) -> NodeLocation | None:
        return self._index.location(node_id)

    def is_expanded(self, folder_id: object) -> bool:
        return isinstance(folder_id, str) and folder_id in self._expanded

    def is_selected(self, leaf_id: object) -> bool:
        return isinstance(leaf_id, str) and leaf_id in self._selected

    def visible_rows(self) -> list[TreeRow]:
        """Flatten the current tree into rows, honoring expansion."""
        return build_visible_rows(self._tree, self._expanded)

    def invariant_violations(self) -> list[str]:
        """Describe any broken store invariant; an empty list means consistent."""
        problems: list[str] = []
        for folder_id in sorted(self._expanded):
            if self._index.folder(folder_id) is None:
                problems.append(f"expanded id is not a folder: {folder_id!r}")
        for leaf_id in sorted(self._selected):
            if self._index.leaf(leaf_id) is None:
                problems.append(f"selected id is not a leaf: {leaf_id!r}")
        if self._mode is SelectionMode.SINGLE and len(self._selected) > 1:
            problems.append("single selection mode holds more than one leaf")
        session = self._drag
        if session is not None:
            leaf = self._index.leaf(session.leaf_id)
            location = self._index.location(session.leaf_id)
            if leaf is None or location is None:
                problems.append(f"drag session leaf missing: {session.leaf_id!r}")
            elif leaf.locked:
                problems.append(f"drag session holds locked leaf: {session.leaf_id!r}")
            elif (location.parent_id, location.index) != (session.source_parent_id, session.source_index):
                problems.append(f"drag session source is stale for leaf {session.leaf_id!r}")
        return problems

    # Expansion and selection

    def toggle_expand(self, folder_id: object) -> CommandResult:
        if self._index.folder(folder_id) is None:
            logger.debug("toggle_expand rejected: folder not found id=%r", folder_id)
            return CommandResult.failure(ErrorKind.NOT_FOUND, f"folder not found: {folder_id!r}")
        assert isinstance(folder_id, str)
        if folder_id in self._expanded:
            self._expanded = self._expanded - {folder_id}
            return CommandResult.success(f"collapsed {folder_id}")
        self._expanded = self._expanded | {folder_id}
        return CommandResult.success(f"expanded {folder_id}")

    def toggle_select(self, leaf_id: object, mode: SelectionMode | str | None = None) -> CommandResult:
        """Toggle a leaf's checked state.

        ``single`` mode: a selected leaf clears the selection, any other leaf
        becomes the only selection. ``multi`` mode flips membership. ``None``
        uses the store's default mode.
        """
        effective_mode = _coerce_mode(mode, self._mode)
        if effective_mode is None:
            return CommandResult.failure(ErrorKind.INVALID_STATE, f"unknown selection mode: {mode!r}")
        if self._index.leaf(leaf_id) is None:
            logger.debug("toggle_select rejected: leaf not found id=%r", leaf_id)
            return CommandResult.failure(ErrorKind.NOT_FOUND, f"leaf not found: {leaf_id!r}")
        assert isinstance(leaf_id, str)

        if effective_mode is SelectionMode.SINGLE:
            if leaf_id in self._selected:
                self._selected = frozenset()
                return CommandResult.success("cleared selection")
            self._selected = frozenset({leaf_id})
            return CommandResult.success(f"selected {leaf_id}")

        if leaf_id in self._selected:
            self._selected = self._selected - {leaf_id}
            return CommandResult.success(f"deselected {leaf_id}")
        self._selected = self._selected | {leaf_id}
        return CommandResult.success(f"selected {leaf_id}")

    # Drag and drop

    def begin_drag(self, leaf_id: object) -> CommandResult:
        if self._drag is not None:
            logger.debug("begin_drag rejected: session already open for %r", self._drag.leaf_id)
            return CommandResult.failure(
                ErrorKind.INVALID_STATE,
                f"drag already in progress for leaf {self._drag.leaf_id!r}",
            )
        leaf = self._index.leaf(leaf_id)
        if leaf is None:
            return CommandResult.failure(ErrorKind.NOT_FOUND, f"leaf not found: {leaf_id!r}")
        if leaf.locked:
            logger.debug("begin_drag rejected: leaf %r is locked", leaf.id)
            return CommandResult.failure(ErrorKind.LOCKED, f"leaf {leaf.id!r} is locked")

        location = self._index.locations[leaf.id]
        assert location.parent_id is not None
        self._drag = DragSession(leaf.id, location.parent_id, location.index)
        logger.debug("drag started leaf=%s from=%s[%d]", leaf.id, location.parent_id, location.index)
        return CommandResult.success(f"dragging {leaf.id}")

    def update_drag_target(self, parent_id: object, index: object) -> CommandResult:
        """Record a prospective drop location; the tree is not touched.

        Safe to call on every pointer move: repeating the same candidate keeps
        the same session object.
        """
        if self._drag is None:
            return CommandResult.failure(ErrorKind.INVALID_STATE, "no drag in progress")
        self._drag = self._drag.with_candidate(parent_id, index)
        return CommandResult.success()

    def _plan_session(self, session: DragSession) -> PlanResult:
        source = DragSource(session.leaf_id, session.source_parent_id, session.source_index)
        if session.has_candidate:
            target = DropTarget(session.candidate_parent_id, session.candidate_index)
        else:
            target = DropTarget(session.source_parent_id, session.source_index)
        return plan(self._tree, source, target, index=self._index)

    def preview_drop(self) -> CommandResult:
        """Report where the current candidate would put the leaf, without applying it."""
        if self._drag is None:
            return CommandResult.failure(ErrorKind.INVALID_STATE, "no drag in progress")
        result = self._plan_session(self._drag)
        if isinstance(result, PlanRejected):
            return CommandResult.failure(result.reason, result.message)
        move = AppliedMove(result.leaf_id, result.from_parent_id, result.from_index, result.to_parent_id, result.to_index)
        return CommandResult.success("drop allowed", move=move)

    def commit_drag(self) -> CommandResult:
        """Apply the open session's move; the session closes either way."""
        session = self._drag
        if session is None:
            return CommandResult.failure(ErrorKind.INVALID_STATE, "no drag in progress")
        self._drag = None

        result = self._plan_session(session)
        if isinstance(result, PlanRejected):
            logger.debug("drop rejected leaf=%s reason=%s: %s", session.leaf_id, result.reason.value, result.message)
            return CommandResult.failure(result.reason, result.message)

        move = AppliedMove(result.leaf_id, result.from_parent_id, result.from_index, result.to_parent_id, result.to_index)
        if result.noop:
            logger.debug("drop at origin leaf=%s parent=%s index=%d", move.leaf_id, move.from_parent_id, move.from_index)
            return CommandResult.success("drop at origin", move=move)

        new_index = build_index(result.tree)
        self._tree, self._index = result.tree, new_index
        logger.info(
            "moved leaf %s from %s[%d] to %s[%d]",
            move.leaf_id,
            move.from_parent_id,
            move.from_index,
            move.to_parent_id,
            move.to_index,
        )
        return CommandResult.success(f"moved {move.leaf_id}", move=move)

    def cancel_drag(self) -> CommandResult:
        if self._drag is None:
            return CommandResult.success("no drag in progress")
        logger.debug("drag cancelled leaf=%s", self._drag.leaf_id)
        self._drag = None
        return CommandResult.success("drag cancelled")


__all__ = ["TreeStore"]
