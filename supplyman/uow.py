"""
Unit of Work — transactional envelope for ledger and document changes.

Wraps django.db.transaction.atomic() with explicit begin/commit/rollback
and a release step that runs exactly once per unit, whatever the outcome.

Usage:
    with UnitOfWork('documents.update') as uow:
        ledger.increase(uow, 'R-1', 10, reason='Compra')
    # committed here, or rolled back if the block raised; released either way

A unit of work is single-use: begin() on a unit that already started
raises UnitOfWorkError. Nesting is not supported; the service that opens
a unit owns it for the whole public operation.
"""

import logging

from django.db import transaction

from supplyman.conf import supplyman_settings
from supplyman.exceptions import UnitOfWorkError

logger = logging.getLogger('supplyman')

NEW = 'new'
ACTIVE = 'active'
COMMITTED = 'committed'
ROLLED_BACK = 'rolled_back'


class UnitOfWork:
    """Single transactional scope for one public operation."""

    def __init__(self, operation: str = 'unit_of_work', using: str | None = None):
        self.operation = operation
        self.using = using or supplyman_settings.DATABASE_ALIAS
        self.state = NEW
        self.released = False
        self._atomic = None

    @property
    def active(self) -> bool:
        return self.state == ACTIVE

    def require_active(self) -> None:
        """Raise unless this unit is between begin() and commit()/rollback()."""
        if not self.active:
            raise UnitOfWorkError(
                f"Unidade de trabalho {self.operation} não está ativa",
                operation=self.operation,
                state=self.state,
            )

    # ══════════════════════════════════════════════════════════════
    # LIFECYCLE
    # ══════════════════════════════════════════════════════════════

    def begin(self) -> 'UnitOfWork':
        if self.state != NEW:
            raise UnitOfWorkError(
                f"Unidade de trabalho {self.operation} já foi iniciada",
                operation=self.operation,
                state=self.state,
            )
        self._atomic = transaction.atomic(using=self.using)
        self._atomic.__enter__()
        self.state = ACTIVE
        logger.debug("uow.begin", extra={"operation": self.operation})
        return self

    def commit(self) -> None:
        self.require_active()
        atomic, self._atomic = self._atomic, None
        try:
            atomic.__exit__(None, None, None)
        except BaseException:
            # atomic already rolled back when the commit itself failed
            self.state = ROLLED_BACK
            raise
        self.state = COMMITTED
        logger.debug("uow.commit", extra={"operation": self.operation})

    def rollback(self) -> None:
        self.require_active()
        atomic, self._atomic = self._atomic, None
        transaction.set_rollback(True, using=self.using)
        try:
            atomic.__exit__(None, None, None)
        finally:
            self.state = ROLLED_BACK
        logger.debug("uow.rollback", extra={"operation": self.operation})

    def release(self) -> None:
        """Close the unit. Rolls back first if still active."""
        if self.released:
            return
        try:
            if self.active:
                self.rollback()
        finally:
            self.released = True
            logger.debug(
                "uow.release",
                extra={"operation": self.operation, "state": self.state},
            )

    # ══════════════════════════════════════════════════════════════
    # CONTEXT MANAGER
    # ══════════════════════════════════════════════════════════════

    def __enter__(self) -> 'UnitOfWork':
        return self.begin()

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        try:
            if exc_type is None:
                self.commit()
            elif self.active:
                self.rollback()
        finally:
            self.release()
        return False

    def __repr__(self) -> str:
        return f"<UnitOfWork {self.operation} state={self.state} released={self.released}>"
