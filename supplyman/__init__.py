"""
Django Supplyman — supply movements reconciled against a stock ledger.

Uso:
    from supplyman import ledger, Direction, LedgerError

    ledger.create_document(Direction.INCREASES_STOCK, hoje, [{'resource_id': 'ureia', 'quantity': 4500}])
    ledger.create_document(Direction.DECREASES_STOCK, hoje, [{'resource_id': 'ureia', 'quantity': 4000}])
    ledger.amount('ureia')  # 500
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'ledger':
        from supplyman.service import Ledger
        return Ledger
    elif name == 'UnitOfWork':
        from supplyman.uow import UnitOfWork
        return UnitOfWork
    elif name == 'Direction':
        from supplyman.models.enums import Direction
        return Direction
    elif name == 'StockEntry':
        from supplyman.models.stock import StockEntry
        return StockEntry
    elif name == 'StockMove':
        from supplyman.models.stock import StockMove
        return StockMove
    elif name == 'MovementDocument':
        from supplyman.models.document import MovementDocument
        return MovementDocument
    elif name == 'DetailLine':
        from supplyman.models.document import DetailLine
        return DetailLine
    elif name in ('LedgerError', 'InsufficientStock', 'LinkedRecordError',
                  'DocumentNotFound', 'StoreError'):
        from supplyman import exceptions
        return getattr(exceptions, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ledger',
    'UnitOfWork',
    'Direction',
    'StockEntry',
    'StockMove',
    'MovementDocument',
    'DetailLine',
    'LedgerError',
    'InsufficientStock',
    'LinkedRecordError',
    'DocumentNotFound',
    'StoreError',
]

__version__ = '0.1.0'
