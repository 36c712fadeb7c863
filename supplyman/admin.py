"""
Supplyman Admin — read-only views for production debugging.

- StockEntry: read-only (resource, amount, unit)
- StockMove: read-only audit trail (timestamp, delta, reason)
- MovementDocument: read-only with lines inline

Stock only changes through the ledger service, never through the admin.
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from supplyman.models import DetailLine, MovementDocument, StockEntry, StockMove
from supplyman.services.ledger import StockLedger
from supplyman.uow import UnitOfWork

logger = logging.getLogger(__name__)


class ReadOnlyAdminMixin:
    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# STOCK ENTRY ADMIN (read-only)
# =========================================================================

@admin.register(StockEntry)
class StockEntryAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """StockEntry admin — read-only."""

    list_display = ['resource_id', 'amount', 'unit', 'updated_at']
    search_fields = ['resource_id']
    readonly_fields = ['resource_id', 'amount', 'unit', 'created_at', 'updated_at']
    actions = ['recalculate_entries']

    @admin.action(description=_('Recalcular a partir dos movimentos'))
    def recalculate_entries(self, request, queryset):
        count = 0
        with UnitOfWork('admin.recalculate') as uow:
            for resource_id in queryset.values_list('resource_id', flat=True):
                old, new = StockLedger.recalculate(uow, resource_id)
                if old != new:
                    count += 1
        self.message_user(request, _('{count} estoque(s) corrigido(s).').format(count=count))


# =========================================================================
# STOCK MOVE ADMIN (read-only audit trail)
# =========================================================================

@admin.register(StockMove)
class StockMoveAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """StockMove admin — immutable audit trail."""

    list_display = ['timestamp', 'entry', 'delta', 'reason', 'document']
    list_filter = ['timestamp']
    search_fields = ['reason', 'entry__resource_id']
    readonly_fields = ['entry', 'delta', 'reason', 'document', 'line_id', 'timestamp']
    date_hierarchy = 'timestamp'


# =========================================================================
# MOVEMENT DOCUMENT ADMIN (read-only)
# =========================================================================

class DetailLineInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = DetailLine
    extra = 0
    fields = ['resource_id', 'quantity', 'unit', 'stock_quantity', 'is_removed', 'is_settled']
    readonly_fields = fields


@admin.register(MovementDocument)
class MovementDocumentAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    """MovementDocument admin — read-only. Edit through the ledger service."""

    list_display = ['__str__', 'date', 'direction', 'kind', 'reference', 'line_count']
    list_filter = ['direction', 'kind', 'date']
    search_fields = ['reference', 'notes', 'lines__resource_id']
    readonly_fields = ['date', 'direction', 'kind', 'reference', 'notes', 'metadata',
                       'created_at', 'updated_at']
    date_hierarchy = 'date'
    inlines = [DetailLineInline]

    @admin.display(description=_('Linhas'))
    def line_count(self, obj):
        return obj.lines.count()
