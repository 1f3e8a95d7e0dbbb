"""Tree store commands/queries and the value types they exchange."""

from __future__ import annotations

from .state import AppliedMove, CommandResult, DragSession, SelectionMode, TreeSnapshot
from .store import TreeStore

__all__ = [
    "TreeStore",
    "SelectionMode",
    "DragSession",
    "AppliedMove",
    "CommandResult",
    "TreeSnapshot",
]
