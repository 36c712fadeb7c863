"""
StockEntry and StockMove models — the stock ledger.
"""

from django.db import models
from django.db.models import Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class StockEntry(models.Model):
    """
    Available quantity of one resource (supply).

    Rules:
    - amount is never negative (check constraint + guarded decrease)
    - Only the stock ledger service changes amount
    - Created lazily with amount=0 on the first movement
    - Never deleted here: whoever deletes the resource must check amount == 0

    Performance:
    - amount is a cache kept in sync with StockMove in the same transaction
    - Use StockLedger.recalculate() for audit/correction
    """

    resource_id = models.CharField(
        max_length=64,
        unique=True,
        verbose_name=_('Insumo'),
    )
    amount = models.BigIntegerField(
        default=0,
        verbose_name=_('Quantidade'),
    )
    unit = models.CharField(
        max_length=8,
        blank=True,
        default='',
        verbose_name=_('Unidade'),
        help_text=_('Unidade do estoque. Vazio = unidade não informada.'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Estoque')
        verbose_name_plural = _('Estoques')
        ordering = ['resource_id']
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gte=0),
                name='supplyman_stockentry_amount_non_negative',
            ),
        ]

    def moves_total(self) -> int:
        """
        Signed sum of this entry's StockMoves.

        Equals amount while the ledger is healthy. Read-only: corrections
        go through StockLedger.recalculate().
        """
        return self.moves.aggregate(
            t=Coalesce(Sum('delta'), 0, output_field=models.BigIntegerField())
        )['t']

    def __str__(self) -> str:
        unit = f" {self.unit}" if self.unit else ""
        return f"{self.resource_id}: {self.amount}{unit}"


class StockMove(models.Model):
    """
    Immutable record of one ledger change.

    Rules:
    - NEVER update() or delete()
    - Reversals are new moves with the inverse delta
    """

    entry = models.ForeignKey(
        StockEntry,
        on_delete=models.PROTECT,
        related_name='moves',
        verbose_name=_('Estoque'),
    )
    delta = models.BigIntegerField(
        verbose_name=_('Variação'),
        help_text=_('Positivo = entrada, Negativo = saída'),
    )
    reason = models.CharField(
        max_length=255,
        verbose_name=_('Motivo'),
    )
    document = models.ForeignKey(
        'supplyman.MovementDocument',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='moves',
        verbose_name=_('Documento'),
    )
    line_id = models.PositiveBigIntegerField(
        null=True,
        blank=True,
        verbose_name=_('Linha'),
    )
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))

    class Meta:
        verbose_name = _('Movimento')
        verbose_name_plural = _('Movimentos')
        ordering = ['timestamp', 'pk']
        indexes = [
            models.Index(fields=['entry', 'timestamp'], name='supplyman_s_entry_i_5c1f0e_idx'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError(
                "Movimentos são imutáveis. "
                "Para corrigir, crie um novo movimento com delta inverso."
            )
        if not self.reason:
            raise ValueError("Motivo é obrigatório")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError(
            "Movimentos são imutáveis. "
            "Para estornar, crie um novo movimento com delta inverso."
        )

    def __str__(self) -> str:
        signal = '+' if self.delta > 0 else ''
        return f"{signal}{self.delta} | {self.reason}"
