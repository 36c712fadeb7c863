"""
Movement documents — create, update and remove documents with their lines,
keeping the stock ledger in sync.

Every public operation runs in exactly one UnitOfWork. On any error the
ledger and the lines are left exactly as they were before the call.

Update order (fixed):
    1. deleted lines: lock check → revert old effect → delete
    2. kept lines:    lock check → revert old effect → apply new → save
    3. new lines:     create → apply effect
    4. header fields
"""

import logging
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date as date_type, datetime
from typing import Any

from django.db import DatabaseError

from supplyman import units
from supplyman.adapters.loader import get_lock_policy, get_resource_catalog
from supplyman.conf import supplyman_settings
from supplyman.exceptions import (
    DocumentNotFound,
    IncompatibleUnit,
    InvalidDocument,
    InvalidQuantity,
    InvalidUnit,
    LedgerError,
    LinkedRecordError,
    StoreError,
    UnknownResource,
)
from supplyman.models.document import DetailLine, MovementDocument
from supplyman.models.enums import Direction
from supplyman.services.ledger import StockLedger
from supplyman.services.reconcile import reconcile
from supplyman.uow import UnitOfWork

logger = logging.getLogger('supplyman')

HEADER_FIELDS = ('date', 'kind', 'reference', 'notes', 'metadata')


@dataclass(frozen=True)
class LineSpec:
    """Desired state of one detail line (id=None = new line)."""

    resource_id: str
    quantity: int
    id: int | None = None
    unit: str = ''
    metadata: dict = field(default_factory=dict)

    @classmethod
    def coerce(cls, value) -> 'LineSpec':
        """Build from a LineSpec or a mapping with resource_id/quantity."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise InvalidDocument(f"Linha inválida: {value!r}")

        for required in ('resource_id', 'quantity'):
            if required not in value:
                raise InvalidDocument(f"Linha sem o campo {required}", field=required)

        line_id = value.get('id')
        if line_id is not None:
            try:
                line_id = int(line_id)
            except (TypeError, ValueError):
                raise InvalidDocument(f"Identificador de linha inválido: {line_id!r}", line_id=line_id) from None

        return cls(
            resource_id=str(value['resource_id']),
            quantity=value['quantity'],
            id=line_id,
            unit=value.get('unit') or '',
            metadata=dict(value.get('metadata') or {}),
        )


@dataclass
class BulkRemovalResult:
    """Outcome of remove_documents(): one entry per requested id."""

    success: list = field(default_factory=list)
    failed: list[tuple[Any, dict]] = field(default_factory=list)


@contextmanager
def _unit_of_work(operation: str, **context):
    """UnitOfWork whose database failures surface as StoreError."""
    try:
        with UnitOfWork(operation) as uow:
            yield uow
    except DatabaseError as exc:
        logger.error(
            f"{operation}.store_failure",
            extra={"error": str(exc), **context},
            exc_info=True,
        )
        raise StoreError(operation, **context) from exc
    except LedgerError as exc:
        logger.warning(
            f"{operation}.rejected",
            extra={"code": exc.code, "error": exc.message, **context},
        )
        raise


class MovementDocuments:
    """Document lifecycle methods."""

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def get_document(cls, document_id) -> MovementDocument:
        """
        Load a document with its lines.

        Raises:
            DocumentNotFound: If the document does not exist
        """
        try:
            return MovementDocument.objects.prefetch_related('lines').get(pk=document_id)
        except (MovementDocument.DoesNotExist, ValueError, TypeError):
            raise DocumentNotFound(document_id) from None

    # ══════════════════════════════════════════════════════════════
    # OPERATIONS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def create_document(cls, direction, date, lines, *, catalog=None, **header) -> MovementDocument:
        """
        Create a document and apply every line to the ledger.

        All-or-nothing: if any line fails (e.g. InsufficientStock on the
        third line of a consumption), no line and no effect is kept.

        Args:
            direction: Direction.INCREASES_STOCK or Direction.DECREASES_STOCK
            date: Document date
            lines: LineSpec instances or mappings (resource_id, quantity,
                   unit, metadata)
            catalog: ResourceCatalog (None = configured one)
            **header: kind, reference, notes, metadata

        Raises:
            InsufficientStock, InvalidQuantity, InvalidUnit,
            IncompatibleUnit, UnknownResource, InvalidDocument, StoreError
        """
        direction = cls._coerce_direction(direction)
        header = cls._clean_header({**header, 'date': date}, allowed=HEADER_FIELDS)
        date = header.pop('date')
        specs = cls._coerce_lines(lines)
        if not specs:
            raise InvalidDocument("Documento sem linhas")

        catalog = catalog or get_resource_catalog()
        effects = [cls._stock_effect(spec, catalog) for spec in specs]

        with _unit_of_work('documents.create', direction=direction.value) as uow:
            document = MovementDocument.objects.using(uow.using).create(
                date=date,
                direction=direction,
                **header,
            )
            for spec, (stock_quantity, resource_unit) in zip(specs, effects):
                cls._create_line(uow, document, spec, stock_quantity, resource_unit)

        logger.info(
            "documents.create",
            extra={
                "document_id": document.pk,
                "direction": direction.value,
                "lines": len(specs),
            },
        )
        return cls.get_document(document.pk)

    @classmethod
    def update_document(cls, document_id, lines, *, catalog=None, lock_policy=None,
                        **header) -> MovementDocument:
        """
        Reconcile a document's lines with the desired list and adjust the ledger.

        Lines are matched by id: ids present on both sides are updated,
        ids missing from `lines` are deleted, lines without id (or with an
        id the document does not own) are created.

        Raises:
            DocumentNotFound: Before any transaction begins
            LinkedRecordError: If a line to change or delete is locked
            InsufficientStock, InvalidQuantity, InvalidUnit,
            IncompatibleUnit, UnknownResource, InvalidDocument, StoreError
        """
        document = cls.get_document(document_id)
        header = cls._clean_header(header, allowed=HEADER_FIELDS, direction=document.direction)
        specs = cls._coerce_lines(lines)

        catalog = catalog or get_resource_catalog()
        lock_policy = lock_policy or get_lock_policy()
        effects = [cls._stock_effect(spec, catalog) for spec in specs]

        with _unit_of_work('documents.update', document_id=document.pk) as uow:
            document = cls._lock_document(uow, document.pk)
            direction = document.stock_direction
            old_lines = {
                line.pk: line
                for line in DetailLine.objects.using(uow.using)
                .select_for_update()
                .filter(document=document)
                .order_by('pk')
            }

            plan = reconcile(old_lines, [spec.id for spec in specs])
            logger.info(
                "documents.update.plan",
                extra={"document_id": document.pk, **plan.summary()},
            )

            for line_id in plan.to_delete + plan.to_update:
                cls._check_unlocked(old_lines[line_id], lock_policy)

            # 1. deleted lines
            for line_id in plan.to_delete:
                line = old_lines[line_id]
                StockLedger.revert(
                    uow, direction, line.resource_id, line.stock_quantity,
                    reason=f"Estorno: linha {line.pk} removida do documento #{document.pk}",
                    document=document,
                    line_id=line.pk,
                )
                line.delete()

            # 2. kept lines
            by_id = {
                spec.id: (spec, effect)
                for spec, effect in zip(specs, effects)
                if spec.id is not None
            }
            for line_id in plan.to_update:
                line = old_lines[line_id]
                spec, (stock_quantity, resource_unit) = by_id[line_id]
                StockLedger.revert(
                    uow, direction, line.resource_id, line.stock_quantity,
                    reason=f"Estorno: linha {line.pk} alterada no documento #{document.pk}",
                    document=document,
                    line_id=line.pk,
                )
                StockLedger.apply(
                    uow, direction, spec.resource_id, stock_quantity,
                    reason=f"Documento #{document.pk}: linha {line.pk} alterada",
                    document=document,
                    line_id=line.pk,
                    unit=resource_unit,
                )
                line.resource_id = spec.resource_id
                line.quantity = spec.quantity
                line.unit = spec.unit
                line.stock_quantity = stock_quantity
                line.metadata = spec.metadata
                line.save(update_fields=[
                    'resource_id', 'quantity', 'unit', 'stock_quantity', 'metadata', 'updated_at',
                ])

            # 3. new lines
            to_create = set(plan.to_create)
            for spec, (stock_quantity, resource_unit) in zip(specs, effects):
                if spec.id is None or spec.id in to_create:
                    cls._create_line(uow, document, spec, stock_quantity, resource_unit)

            # 4. header
            if header:
                for name, value in header.items():
                    setattr(document, name, value)
                document.save(update_fields=[*header, 'updated_at'])

        logger.info(
            "documents.update",
            extra={"document_id": document.pk, **plan.summary()},
        )
        return cls.get_document(document.pk)

    @classmethod
    def remove_document(cls, document_id, *, catalog=None, lock_policy=None) -> None:
        """
        Revert every line's effect and delete the document (lines cascade).

        Lines whose resource no longer exists in the catalog skip their
        reversal: there is nothing left to adjust.

        Raises:
            DocumentNotFound: Before any transaction begins
            LinkedRecordError: If any line is locked
            InsufficientStock: If reverting an entry would go negative
            StoreError
        """
        document = cls.get_document(document_id)
        catalog = catalog or get_resource_catalog()
        lock_policy = lock_policy or get_lock_policy()

        skipped = 0
        with _unit_of_work('documents.remove', document_id=document.pk) as uow:
            document = cls._lock_document(uow, document.pk)
            direction = document.stock_direction
            lines = list(
                DetailLine.objects.using(uow.using)
                .select_for_update()
                .filter(document=document)
                .order_by('pk')
            )

            for line in lines:
                cls._check_unlocked(line, lock_policy)

            for line in lines:
                if not catalog.exists(line.resource_id):
                    skipped += 1
                    logger.warning(
                        "documents.remove.skip_reversal",
                        extra={
                            "document_id": document.pk,
                            "line_id": line.pk,
                            "resource_id": line.resource_id,
                        },
                    )
                    continue
                StockLedger.revert(
                    uow, direction, line.resource_id, line.stock_quantity,
                    reason=f"Estorno: documento #{document.pk} removido",
                    document=document,
                    line_id=line.pk,
                )

            removed_pk = document.pk
            document.delete()

        logger.info(
            "documents.remove",
            extra={"document_id": removed_pk, "lines": len(lines), "skipped": skipped},
        )

    @classmethod
    def remove_documents(cls, document_ids, *, catalog=None, lock_policy=None) -> BulkRemovalResult:
        """
        Remove several documents, one unit of work each.

        A failing document does not stop the others; its error is
        reported in result.failed as (document_id, error.as_dict()).
        """
        result = BulkRemovalResult()
        for document_id in document_ids:
            try:
                cls.remove_document(document_id, catalog=catalog, lock_policy=lock_policy)
            except (LedgerError, StoreError) as exc:
                result.failed.append((document_id, exc.as_dict()))
            else:
                result.success.append(document_id)

        logger.info(
            "documents.bulk_remove",
            extra={"success": len(result.success), "failed": len(result.failed)},
        )
        return result

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _coerce_direction(cls, direction) -> Direction:
        try:
            return Direction(direction)
        except ValueError:
            raise InvalidDocument(f"Sentido inválido: {direction!r}", direction=direction) from None

    @classmethod
    def _coerce_lines(cls, lines) -> list[LineSpec]:
        specs = [LineSpec.coerce(line) for line in lines]
        seen = set()
        for spec in specs:
            if spec.id is None:
                continue
            if spec.id in seen:
                raise InvalidDocument(f"Linha {spec.id} repetida", line_id=spec.id)
            seen.add(spec.id)
        return specs

    @classmethod
    def _clean_header(cls, header: dict, allowed, direction=None) -> dict:
        header = dict(header)
        if 'direction' in header:
            requested = header.pop('direction')
            if direction is None or requested != direction:
                raise InvalidDocument("O sentido do documento não pode ser alterado", direction=requested)

        unknown = set(header) - set(allowed)
        if unknown:
            raise InvalidDocument(f"Campos desconhecidos: {', '.join(sorted(unknown))}")

        for name, value in header.items():
            cls._check_header_value(name, value)
        return header

    @classmethod
    def _check_header_value(cls, name: str, value) -> None:
        """Reject values the document columns cannot store."""
        if name == 'date':
            valid = isinstance(value, date_type) and not isinstance(value, datetime)
        elif name == 'metadata':
            valid = isinstance(value, dict)
        else:
            max_length = MovementDocument._meta.get_field(name).max_length
            valid = isinstance(value, str) and (max_length is None or len(value) <= max_length)
        if not valid:
            raise InvalidDocument(f"Valor inválido para {name}: {value!r}", field=name)

    @classmethod
    def _stock_effect(cls, spec: LineSpec, catalog) -> tuple[int, str]:
        """
        Validate a line and return (stock_quantity, resource_unit).

        stock_quantity is the integer ledger effect in the resource unit.
        """
        quantity = spec.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantity(quantity, resource_id=spec.resource_id)

        info = catalog.get_resource(spec.resource_id)
        if info is None and supplyman_settings.VALIDATE_RESOURCES:
            raise UnknownResource(spec.resource_id)
        resource_unit = info.unit if info is not None else ''

        if spec.unit and supplyman_settings.VALIDATE_UNITS:
            if not units.is_valid_unit(spec.unit):
                raise InvalidUnit(spec.unit, resource_id=spec.resource_id)
            if resource_unit and units.unit_kind(spec.unit) != units.unit_kind(resource_unit):
                raise IncompatibleUnit(spec.unit, resource_unit, resource_id=spec.resource_id)

        stock_quantity = units.to_stock_quantity(quantity, spec.unit, resource_unit)
        if stock_quantity <= 0:
            raise InvalidQuantity(quantity, resource_id=spec.resource_id, unit=spec.unit)
        return stock_quantity, resource_unit

    @classmethod
    def _check_unlocked(cls, line: DetailLine, lock_policy) -> None:
        if lock_policy.is_locked(line):
            reason = lock_policy.lock_reason(line) or 'locked'
            logger.warning(
                "documents.line_locked",
                extra={"line_id": line.pk, "document_id": line.document_id, "reason": reason},
            )
            raise LinkedRecordError(line.pk, reason)

    @classmethod
    def _lock_document(cls, uow, document_id) -> MovementDocument:
        try:
            return MovementDocument.objects.using(uow.using).select_for_update().get(pk=document_id)
        except MovementDocument.DoesNotExist:
            raise DocumentNotFound(document_id) from None

    @classmethod
    def _create_line(cls, uow, document, spec: LineSpec, stock_quantity: int,
                     resource_unit: str) -> DetailLine:
        line = DetailLine.objects.using(uow.using).create(
            document=document,
            resource_id=spec.resource_id,
            quantity=spec.quantity,
            unit=spec.unit,
            stock_quantity=stock_quantity,
            metadata=spec.metadata,
        )
        StockLedger.apply(
            uow, document.direction, spec.resource_id, stock_quantity,
            reason=f"Documento #{document.pk}: linha {line.pk}",
            document=document,
            line_id=line.pk,
            unit=resource_unit,
        )
        return line
