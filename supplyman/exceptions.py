"""
Exceptions for Supplyman.

Every error carries a structured code for programmatic handling.
Domain errors (LedgerError subclasses) mean "the request was invalid";
StoreError means "the system failed" and always wraps the database error.
"""

from typing import Any


class BaseError(Exception):
    """
    Structured error with code, message and context data.

    Usage:
        raise BaseError('SOMETHING_WRONG', resource_id='R-1')

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {k: str(v) if v is not None else None for k, v in self.data.items()},
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"


class LedgerError(BaseError):
    """
    Domain error raised by ledger and document operations.

    Usage:
        try:
            ledger.create_document(Direction.DECREASES_STOCK, today, lines)
        except LedgerError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Só tem {e.data['current_amount']} disponível")
    """

    _default_messages = {
        'INSUFFICIENT_STOCK': 'Estoque insuficiente',
        'LINKED_RECORD': 'Registro vinculado a outros registros',
        'DOCUMENT_NOT_FOUND': 'Documento não encontrado',
        'INVALID_QUANTITY': 'Quantidade inválida (deve ser inteira e positiva)',
        'INVALID_UNIT': 'Unidade de medida inválida',
        'INCOMPATIBLE_UNIT': 'Unidades de tipos diferentes',
        'UNKNOWN_RESOURCE': 'Insumo não encontrado',
        'INVALID_DOCUMENT': 'Documento inválido',
    }


class InsufficientStock(LedgerError):
    """Decrease larger than the current amount."""

    def __init__(self, resource_id: str, current_amount: int, requested: int):
        super().__init__(
            'INSUFFICIENT_STOCK',
            f"Estoque insuficiente para {resource_id}: "
            f"disponível {current_amount}, solicitado {requested}",
            resource_id=resource_id,
            current_amount=current_amount,
            requested=requested,
        )

    @property
    def resource_id(self) -> str:
        return self.data['resource_id']

    @property
    def current_amount(self) -> int:
        return self.data['current_amount']

    @property
    def requested(self) -> int:
        return self.data['requested']


class LinkedRecordError(LedgerError):
    """Attempt to change or remove a locked detail line."""

    def __init__(self, line_id, reason: str):
        super().__init__(
            'LINKED_RECORD',
            f"A linha {line_id} não pode ser alterada: {reason}",
            line_id=line_id,
            reason=reason,
        )

    @property
    def line_id(self):
        return self.data['line_id']

    @property
    def reason(self) -> str:
        return self.data['reason']


class DocumentNotFound(LedgerError):
    """Target document does not exist."""

    def __init__(self, document_id):
        super().__init__(
            'DOCUMENT_NOT_FOUND',
            f"Documento {document_id} não encontrado",
            document_id=document_id,
        )

    @property
    def document_id(self):
        return self.data['document_id']


class InvalidQuantity(LedgerError):
    def __init__(self, quantity, **data):
        super().__init__('INVALID_QUANTITY', requested=quantity, **data)


class InvalidUnit(LedgerError):
    def __init__(self, unit, **data):
        super().__init__('INVALID_UNIT', f"Unidade de medida inválida: {unit}", unit=unit, **data)


class IncompatibleUnit(LedgerError):
    def __init__(self, unit, resource_unit, **data):
        super().__init__(
            'INCOMPATIBLE_UNIT',
            f"Não é possível converter entre {unit} e {resource_unit}",
            unit=unit,
            resource_unit=resource_unit,
            **data,
        )


class UnknownResource(LedgerError):
    def __init__(self, resource_id, **data):
        super().__init__(
            'UNKNOWN_RESOURCE',
            f"Insumo {resource_id} não encontrado",
            resource_id=resource_id,
            **data,
        )


class InvalidDocument(LedgerError):
    def __init__(self, message: str, **data):
        super().__init__('INVALID_DOCUMENT', message, **data)


class UnitOfWorkError(BaseError):
    """Misuse of a unit of work (reuse, nesting, inactive scope)."""

    def __init__(self, message: str, **data):
        super().__init__('UNIT_OF_WORK', message, **data)


class StoreError(BaseError):
    """
    Opaque infrastructure failure (connection loss, constraint violation).

    Always raised after rollback and release. The original database
    error is available as ``__cause__``.
    """

    def __init__(self, operation: str, **data):
        super().__init__(
            'STORE_FAILURE',
            f"Falha no armazenamento durante {operation}",
            operation=operation,
            **data,
        )
