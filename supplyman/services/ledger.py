"""
Stock ledger — guarded increase/decrease of StockEntry amounts.

Every method takes the active UnitOfWork explicitly. Effects are visible
only inside that unit until it commits.

Concurrency:
    - decrease() locks the entry row with select_for_update()
    - the decrement itself is a conditional UPDATE ... WHERE amount >= delta,
      so two callers can never both pass the insufficiency check
"""

import logging

from django.db.models import F
from django.utils import timezone

from supplyman.exceptions import InsufficientStock, InvalidQuantity
from supplyman.models.enums import Direction
from supplyman.models.stock import StockEntry, StockMove

logger = logging.getLogger('supplyman')


def _check_delta(resource_id: str, delta) -> None:
    if isinstance(delta, bool) or not isinstance(delta, int) or delta <= 0:
        raise InvalidQuantity(delta, resource_id=resource_id)


class StockLedger:
    """Ledger mutations. The only code that changes StockEntry.amount."""

    @classmethod
    def ensure_entry(cls, uow, resource_id: str, unit: str = '') -> StockEntry:
        """
        Get or create the entry for a resource (amount=0 when created).

        Idempotent. Fills in the unit on an existing entry that has none.
        """
        uow.require_active()

        entry, created = StockEntry.objects.using(uow.using).get_or_create(
            resource_id=resource_id,
            defaults={'unit': unit},
        )
        if created:
            logger.info(
                "ledger.entry_created",
                extra={"resource_id": resource_id, "unit": unit},
            )
        elif unit and not entry.unit:
            entry.unit = unit
            entry.save(update_fields=['unit', 'updated_at'])
        return entry

    @classmethod
    def increase(cls, uow, resource_id: str, delta: int, reason: str = 'Entrada',
                 document=None, line_id=None, unit: str = '') -> StockMove:
        """
        Add delta to the resource amount. No upper bound.

        Raises:
            InvalidQuantity: If delta is not a positive integer
        """
        _check_delta(resource_id, delta)
        entry = cls.ensure_entry(uow, resource_id, unit)

        StockEntry.objects.using(uow.using).filter(pk=entry.pk).update(
            amount=F('amount') + delta,
            updated_at=timezone.now(),
        )
        move = StockMove.objects.using(uow.using).create(
            entry=entry,
            delta=delta,
            reason=reason,
            document=document,
            line_id=line_id,
        )
        logger.info(
            "ledger.increase",
            extra={
                "resource_id": resource_id,
                "delta": delta,
                "reason": reason,
                "document_id": getattr(document, 'pk', None),
            },
        )
        return move

    @classmethod
    def decrease(cls, uow, resource_id: str, delta: int, reason: str = 'Saída',
                 document=None, line_id=None, unit: str = '') -> StockMove:
        """
        Subtract delta from the resource amount.

        Raises:
            InsufficientStock: If amount < delta (nothing is changed)
            InvalidQuantity: If delta is not a positive integer
        """
        _check_delta(resource_id, delta)
        entry = cls.ensure_entry(uow, resource_id, unit)

        entries = StockEntry.objects.using(uow.using)
        locked = entries.select_for_update().get(pk=entry.pk)

        updated = entries.filter(pk=entry.pk, amount__gte=delta).update(
            amount=F('amount') - delta,
            updated_at=timezone.now(),
        )
        if not updated:
            logger.warning(
                "ledger.insufficient",
                extra={
                    "resource_id": resource_id,
                    "current_amount": locked.amount,
                    "requested": delta,
                },
            )
            raise InsufficientStock(resource_id, locked.amount, delta)

        move = StockMove.objects.using(uow.using).create(
            entry=entry,
            delta=-delta,
            reason=reason,
            document=document,
            line_id=line_id,
        )
        logger.info(
            "ledger.decrease",
            extra={
                "resource_id": resource_id,
                "delta": delta,
                "reason": reason,
                "document_id": getattr(document, 'pk', None),
            },
        )
        return move

    @classmethod
    def recalculate(cls, uow, resource_id: str) -> tuple[int, int]:
        """
        Reset the cached amount to the signed sum of the entry's moves.

        Repairs drift between amount and the move trail only. A mismatch
        against the detail lines with a consistent move trail is left
        untouched.

        Returns:
            (old_amount, new_amount); equal when nothing changed
        """
        uow.require_active()

        entry = StockEntry.objects.using(uow.using).select_for_update().get(
            resource_id=resource_id,
        )
        old, total = entry.amount, entry.moves_total()
        if total != old:
            StockEntry.objects.using(uow.using).filter(pk=entry.pk).update(
                amount=total,
                updated_at=timezone.now(),
            )
            logger.warning(
                "ledger.recalculated",
                extra={
                    "resource_id": resource_id,
                    "old_amount": old,
                    "new_amount": total,
                    "diff": total - old,
                },
            )
        return old, total

    @classmethod
    def apply(cls, uow, direction, resource_id: str, delta: int, **kwargs) -> StockMove:
        """Apply a line effect in the document direction."""
        if Direction(direction) == Direction.INCREASES_STOCK:
            return cls.increase(uow, resource_id, delta, **kwargs)
        return cls.decrease(uow, resource_id, delta, **kwargs)

    @classmethod
    def revert(cls, uow, direction, resource_id: str, delta: int, **kwargs) -> StockMove:
        """Undo a line effect: the inverse of the document direction."""
        return cls.apply(uow, Direction(direction).inverse, resource_id, delta, **kwargs)
