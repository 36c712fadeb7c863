"""
Management command to audit the stock ledger.

Checks that every StockEntry equals the signed sum of its live detail lines.
With --fix, entries whose amount drifted from their move trail are reset
through the ledger; mismatches that remain afterwards are reported again.

Usage:
    python manage.py audit_stock
    python manage.py audit_stock --fix
"""

import logging

from django.core.management.base import BaseCommand

from supplyman.models import StockEntry
from supplyman.services.ledger import StockLedger
from supplyman.services.queries import StockQueries
from supplyman.uow import UnitOfWork

logger = logging.getLogger('supplyman')


class Command(BaseCommand):
    """Stock audit command."""

    help = 'Confere o estoque contra as linhas dos documentos'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Recalcula os estoques divergentes a partir dos movimentos'
        )

    def handle(self, *args, **options):
        mismatches = StockQueries.audit()

        if not mismatches:
            self.stdout.write(self.style.SUCCESS('Estoque consistente'))
            return

        self._report(mismatches)

        if not options['fix']:
            self.stdout.write(self.style.WARNING(f'{len(mismatches)} divergência(s) encontrada(s)'))
            return

        fixed = 0
        with UnitOfWork('stock.audit.fix') as uow:
            resource_ids = StockEntry.objects.using(uow.using).filter(
                resource_id__in=[m[0] for m in mismatches],
            ).values_list('resource_id', flat=True)
            for resource_id in resource_ids:
                old, new = StockLedger.recalculate(uow, resource_id)
                if old != new:
                    fixed += 1
        self.stdout.write(self.style.SUCCESS(f'{fixed} estoque(s) recalculado(s)'))

        remaining = StockQueries.audit()
        if remaining:
            self.stdout.write('Divergências que persistem (movimentos e linhas discordam):')
            self._report(remaining)
            self.stdout.write(self.style.WARNING(f'{len(remaining)} divergência(s) não corrigida(s)'))
        else:
            self.stdout.write(self.style.SUCCESS('Estoque consistente'))

    def _report(self, mismatches):
        for resource_id, amount, expected in mismatches:
            logger.error(
                "stock.audit.mismatch",
                extra={"resource_id": resource_id, "amount": amount, "expected": expected},
            )
            self.stdout.write(f'{resource_id}: estoque {amount}, esperado {expected}')
