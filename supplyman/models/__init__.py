"""
Supplyman Models.

Core models:
- StockEntry: Available quantity per resource
- StockMove: Immutable ledger of changes
- MovementDocument: Dated movement (purchase, consumption...)
- DetailLine: Resource/quantity pair owned by a document
"""

from supplyman.models.document import DetailLine, MovementDocument
from supplyman.models.enums import Direction, LockReason
from supplyman.models.stock import StockEntry, StockMove

__all__ = [
    'Direction',
    'LockReason',
    'StockEntry',
    'StockMove',
    'MovementDocument',
    'DetailLine',
]
