"""
Lock Policy Protocol — may a detail line still change?

Implemented by the subsystems that depend on detail lines (payments,
cascaded removals). Supplyman consults the policy before updating or
deleting any existing line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from supplyman.models import DetailLine


@runtime_checkable
class LockPolicy(Protocol):
    """Predicate over detail lines."""

    def is_locked(self, line: DetailLine) -> bool:
        """True if the line must not be changed or removed."""
        ...

    def lock_reason(self, line: DetailLine) -> str | None:
        """Human-readable reason, or None when the line is free."""
        ...
