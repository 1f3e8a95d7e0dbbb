"""Value types exchanged across the tree-store boundary."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..errors import ErrorKind
from ..tree_model.types import Tree


class SelectionMode(str, Enum):
    """How ``toggle_select`` treats the existing selection."""

    MULTI = "multi"
    SINGLE = "single"


def _same_value(left: object, right: object) -> bool:
    # ``True == 1`` and ``1 == 1.0``; a candidate must be recorded as given.
    return type(left) is type(right) and left == right


@dataclass(frozen=True)
class DragSession:
    """In-progress move, alive only between ``begin_drag`` and commit/cancel."""

    leaf_id: str
    source_parent_id: str
    source_index: int
    candidate_parent_id: object = None
    candidate_index: object = None
    has_candidate: bool = False

    def with_candidate(self, parent_id: object, index: object) -> DragSession:
        if self.has_candidate and _same_value(self.candidate_parent_id, parent_id) and _same_value(
            self.candidate_index, index
        ):
            return self
        return replace(self, candidate_parent_id=parent_id, candidate_index=index, has_candidate=True)


@dataclass(frozen=True)
class AppliedMove:
    """Where a committed (or previewed) leaf move takes the leaf."""

    leaf_id: str
    from_parent_id: str
    from_index: int
    to_parent_id: str
    to_index: int


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one store command.

    ``error`` is ``None`` exactly when ``ok`` is true. ``move`` is populated by
    ``commit_drag`` and ``preview_drop`` successes.
    """

    ok: bool
    error: ErrorKind | None = None
    message: str = ""
    move: AppliedMove | None = None

    @classmethod
    def success(cls, message: str = "", move: AppliedMove | None = None) -> CommandResult:
        return cls(ok=True, message=message, move=move)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> CommandResult:
        return cls(ok=False, error=error, message=message)


@dataclass(frozen=True)
class TreeSnapshot:
    """Immutable read of the tree plus expansion/selection/drag state."""

    tree: Tree
    expanded: frozenset[str]
    selected: frozenset[str]
    selection_mode: SelectionMode
    drag: DragSession | None = None


__all__ = [
    "SelectionMode",
    "DragSession",
    "AppliedMove",
    "CommandResult",
    "TreeSnapshot",
]
