"""
Supplyman configuration.

Usage in settings.py:
    SUPPLYMAN = {
        "RESOURCE_CATALOG": "supplies.adapters.catalog.SuppliesCatalog",
        "LOCK_POLICY": "payments.adapters.locks.PaymentLockPolicy",
        "VALIDATE_RESOURCES": True,
        "VALIDATE_UNITS": True,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class SupplymanSettings:
    """Supplyman configuration settings."""

    # Resource catalog backend (dotted path)
    RESOURCE_CATALOG: str = "supplyman.adapters.noop.NoopResourceCatalog"

    # Lock policy for detail lines (dotted path)
    LOCK_POLICY: str = "supplyman.adapters.locks.LineFlagsLockPolicy"

    # Reject lines whose resource is unknown to the catalog
    VALIDATE_RESOURCES: bool = True

    # Reject lines with unknown units or units of another kind
    VALIDATE_UNITS: bool = True

    # Database alias used by units of work
    DATABASE_ALIAS: str = "default"


def get_supplyman_settings() -> SupplymanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "SUPPLYMAN", {})
    return SupplymanSettings(**{
        k: v for k, v in user_settings.items()
        if k in SupplymanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_supplyman_settings(), name)


supplyman_settings = _LazySettings()
