"""Error taxonomy reported by store commands and the reorder planner.

Errors travel as values inside command results; nothing here is raised
across the store boundary.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable reasons a command or plan was rejected."""

    NOT_FOUND = "not_found"
    """Referenced folder/leaf id does not exist in the current tree."""

    LOCKED = "locked"
    """Attempted to begin a drag on a locked leaf."""

    INVALID_STATE = "invalid_state"
    """Drag command issued outside its valid state."""

    TARGET_NOT_FOUND = "target_not_found"
    """Drop target does not name an existing folder."""

    INVALID_INDEX = "invalid_index"
    """Drop index lies outside ``[0, len(children)]`` of the target folder."""

    SOURCE_NOT_FOUND = "source_not_found"
    """Drag source no longer resolves to a leaf at the recorded position."""

    SOURCE_LOCKED = "source_locked"
    """Planner was asked to move a locked leaf."""


__all__ = ["ErrorKind"]
