"""
Ledger Service — the single public interface for supply movements.

Usage:
    from supplyman import ledger, Direction, LedgerError

    purchase = ledger.create_document(
        Direction.INCREASES_STOCK, today,
        [{'resource_id': 'ureia', 'quantity': 4500}],
        kind='compra',
    )
    ledger.amount('ureia')  # 4500

    ledger.update_document(purchase.pk, [
        {'id': purchase.lines.first().pk, 'resource_id': 'ureia', 'quantity': 5000},
    ])
    ledger.remove_document(purchase.pk)
"""

from supplyman.services.documents import MovementDocuments
from supplyman.services.ledger import StockLedger
from supplyman.services.queries import StockQueries
from supplyman.services.reconcile import reconcile


class Ledger(MovementDocuments, StockQueries):
    """
    Single interface for document operations and stock queries.

    Low-level ledger mutations need an explicit UnitOfWork and live in
    StockLedger; documents are the normal way to move stock.
    """

    entries = StockLedger
    reconcile = staticmethod(reconcile)
