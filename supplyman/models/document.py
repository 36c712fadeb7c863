"""
MovementDocument and DetailLine models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from supplyman.models.enums import Direction


class MovementDocument(models.Model):
    """
    Dated event that changes stock (purchase, consumption, harvest...).

    Aggregate root: lines are created, changed and removed only through
    the MovementDocuments service, which keeps the ledger in sync.
    """

    date = models.DateField(
        db_index=True,
        verbose_name=_('Data'),
    )
    direction = models.CharField(
        max_length=16,
        choices=Direction.choices,
        verbose_name=_('Sentido'),
    )
    kind = models.CharField(
        max_length=32,
        blank=True,
        default='',
        verbose_name=_('Tipo'),
        help_text=_('Ex: compra, consumo, colheita'),
    )
    reference = models.CharField(
        max_length=100,
        blank=True,
        default='',
        verbose_name=_('Referência'),
    )
    notes = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Observações'),
    )
    metadata = models.JSONField(default=dict, blank=True, verbose_name=_('Metadados'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Documento de Movimentação')
        verbose_name_plural = _('Documentos de Movimentação')
        ordering = ['-date', '-pk']

    @property
    def stock_direction(self) -> Direction:
        return Direction(self.direction)

    def __str__(self) -> str:
        arrow = '↑' if self.direction == Direction.INCREASES_STOCK else '↓'
        label = self.kind or self.get_direction_display()
        return f"{arrow} {label} #{self.pk} ({self.date})"


class DetailLine(models.Model):
    """
    One resource/quantity pair within a movement document.

    Lock markers are two explicit booleans, combined by the lock policy:
    - is_removed: soft-removed by another process, kept as a tombstone
      because a dependent record still references it
    - is_settled: a dependent record (e.g. a payment) settled it
    """

    document = models.ForeignKey(
        MovementDocument,
        on_delete=models.CASCADE,
        related_name='lines',
        verbose_name=_('Documento'),
    )
    resource_id = models.CharField(
        max_length=64,
        db_index=True,
        verbose_name=_('Insumo'),
    )
    quantity = models.PositiveIntegerField(
        verbose_name=_('Quantidade'),
    )
    unit = models.CharField(
        max_length=8,
        blank=True,
        default='',
        verbose_name=_('Unidade'),
        help_text=_('Vazio = unidade do insumo'),
    )
    stock_quantity = models.PositiveBigIntegerField(
        verbose_name=_('Quantidade em estoque'),
        help_text=_('Efeito aplicado no estoque, na unidade do insumo'),
    )
    is_removed = models.BooleanField(
        default=False,
        verbose_name=_('Removida'),
    )
    is_settled = models.BooleanField(
        default=False,
        verbose_name=_('Liquidada'),
    )
    metadata = models.JSONField(default=dict, blank=True, verbose_name=_('Metadados'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Linha de Detalhe')
        verbose_name_plural = _('Linhas de Detalhe')
        ordering = ['pk']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='supplyman_detailline_quantity_positive',
            ),
        ]

    def __str__(self) -> str:
        unit = f" {self.unit}" if self.unit else ""
        return f"{self.quantity}{unit} x {self.resource_id}"
