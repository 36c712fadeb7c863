"""
Stock queries — read-only operations.

All methods use no locking.
"""

from django.db.models import Q, Sum

from supplyman.models.document import DetailLine
from supplyman.models.enums import Direction
from supplyman.models.stock import StockEntry


class StockQueries:
    """Read-only stock query methods."""

    @classmethod
    def amount(cls, resource_id: str) -> int:
        """Current amount of a resource (0 when it never moved)."""
        return (
            StockEntry.objects.filter(resource_id=resource_id)
            .values_list('amount', flat=True)
            .first()
        ) or 0

    @classmethod
    def get_entry(cls, resource_id: str) -> StockEntry | None:
        return StockEntry.objects.filter(resource_id=resource_id).first()

    @classmethod
    def list_entries(cls, include_empty: bool = False):
        """List stock entries, by default only those with amount > 0."""
        qs = StockEntry.objects.all()
        if not include_empty:
            qs = qs.filter(amount__gt=0)
        return qs

    @classmethod
    def expected_amounts(cls) -> dict[str, int]:
        """
        Signed sum of live line effects per resource.

        Removed lines (is_removed=True) no longer count.
        """
        rows = (
            DetailLine.objects.filter(is_removed=False)
            .values('resource_id')
            .annotate(
                incoming=Sum(
                    'stock_quantity',
                    filter=Q(document__direction=Direction.INCREASES_STOCK),
                ),
                outgoing=Sum(
                    'stock_quantity',
                    filter=Q(document__direction=Direction.DECREASES_STOCK),
                ),
            )
            .order_by('resource_id')
        )
        return {
            row['resource_id']: (row['incoming'] or 0) - (row['outgoing'] or 0)
            for row in rows
        }

    @classmethod
    def audit(cls) -> list[tuple[str, int, int]]:
        """
        Compare every entry with the sum of its live lines.

        Returns:
            List of (resource_id, amount, expected) for mismatching resources
        """
        expected = cls.expected_amounts()
        mismatches = []
        seen = set()

        for entry in StockEntry.objects.order_by('resource_id'):
            seen.add(entry.resource_id)
            total = expected.get(entry.resource_id, 0)
            if entry.amount != total:
                mismatches.append((entry.resource_id, entry.amount, total))

        for resource_id, total in sorted(expected.items()):
            if resource_id not in seen and total != 0:
                mismatches.append((resource_id, 0, total))

        return mismatches
