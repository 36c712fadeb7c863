"""
Supplyman services — modular organization of ledger operations.

    from supplyman.services import StockLedger, StockQueries, MovementDocuments, reconcile
"""

from supplyman.services.documents import BulkRemovalResult, LineSpec, MovementDocuments
from supplyman.services.ledger import StockLedger
from supplyman.services.queries import StockQueries
from supplyman.services.reconcile import ReconciliationPlan, reconcile

__all__ = [
    'BulkRemovalResult',
    'LineSpec',
    'MovementDocuments',
    'ReconciliationPlan',
    'StockLedger',
    'StockQueries',
    'reconcile',
]
