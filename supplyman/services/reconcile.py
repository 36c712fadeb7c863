"""
Detail-set reconciliation — pure, no I/O.

Classifies line identifiers of a document between its persisted state
(old) and the caller's desired state (new):

    old = [1, 2, 3]          new = [2, 3, None, 7]
    to_delete = (1,)         to_update = (2, 3)         to_create = (None, 7)

Identity decides, content never does: an id present on both sides is an
update even if every field changed.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class ReconciliationPlan:
    """
    Create/update/delete classification of detail-line identifiers.

    Every tuple keeps first-seen order. to_create holds one None per
    line without identifier, since those never collapse.
    """

    to_create: tuple = ()
    to_update: tuple = ()
    to_delete: tuple = ()

    @property
    def is_empty(self) -> bool:
        return not (self.to_create or self.to_update or self.to_delete)

    def summary(self) -> dict[str, int]:
        return {
            'create': len(self.to_create),
            'update': len(self.to_update),
            'delete': len(self.to_delete),
        }


def _unique(ids: Iterable[Hashable]) -> list:
    # dict keeps insertion order
    return list(dict.fromkeys(ids))


def reconcile(old_ids: Iterable[Hashable], new_ids: Iterable[Hashable | None]) -> ReconciliationPlan:
    """
    Build the reconciliation plan for two identifier collections.

    Args:
        old_ids: Identifiers of the lines currently persisted
        new_ids: Identifiers of the desired lines (None = new line)

    Returns:
        ReconciliationPlan with disjoint to_create/to_update/to_delete
    """
    old = _unique(old_ids)
    old_set = set(old)

    to_create = []
    to_update = []
    seen = set()
    for identifier in new_ids:
        if identifier is None:
            to_create.append(None)
            continue
        if identifier in seen:
            continue
        seen.add(identifier)
        if identifier in old_set:
            to_update.append(identifier)
        else:
            to_create.append(identifier)

    return ReconciliationPlan(
        to_create=tuple(to_create),
        to_update=tuple(to_update),
        to_delete=tuple(identifier for identifier in old if identifier not in seen),
    )
