"""Stateless move planning for leaf drag-and-drop."""

from __future__ import annotations

from .planner import (
    DragSource,
    DropTarget,
    PlanAccepted,
    PlanRejected,
    PlanResult,
    insertion_index_after_movable,
    movable_count_before,
    pinned_order,
    plan,
)

__all__ = [
    "DragSource",
    "DropTarget",
    "PlanAccepted",
    "PlanRejected",
    "PlanResult",
    "insertion_index_after_movable",
    "movable_count_before",
    "pinned_order",
    "plan",
]
