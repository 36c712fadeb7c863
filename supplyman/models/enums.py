"""
Enums for Supplyman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Direction(models.TextChoices):
    """
    Stock effect of a movement document.

    INCREASES_STOCK: Every line adds its quantity to the ledger.
                     Examples: Compra de insumos, Colheita, Ajuste positivo
    DECREASES_STOCK: Every line subtracts its quantity from the ledger.
                     Examples: Consumo em cultivo, Venda, Perda
    """
    INCREASES_STOCK = 'increases', _('Entrada')
    DECREASES_STOCK = 'decreases', _('Saída')

    @property
    def inverse(self) -> 'Direction':
        if self == Direction.INCREASES_STOCK:
            return Direction.DECREASES_STOCK
        return Direction.INCREASES_STOCK

    @property
    def sign(self) -> int:
        return 1 if self == Direction.INCREASES_STOCK else -1


class LockReason(models.TextChoices):
    """Why a detail line can no longer change."""
    REMOVED = 'removed', _('Removida por outro registro')
    SETTLED = 'settled', _('Liquidada (pagamento registrado)')
