"""Django app configuration for Supplyman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class SupplymanConfig(AppConfig):
    """Configuration for Supplyman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "supplyman"
    verbose_name = _("Movimentação de Insumos")
