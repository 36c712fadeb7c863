"""
Adapter loading — resource catalog and lock policy from settings.

Usage:
    from supplyman.adapters import get_resource_catalog, get_lock_policy

    catalog = get_resource_catalog()
    catalog.exists("R-001")

Settings:
    SUPPLYMAN = {
        "RESOURCE_CATALOG": "supplies.adapters.catalog.SuppliesCatalog",
        "LOCK_POLICY": "supplyman.adapters.locks.LineFlagsLockPolicy",
    }

A dotted path that cannot be imported raises ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from supplyman.conf import supplyman_settings
from supplyman.protocols.catalog import ResourceCatalog
from supplyman.protocols.locking import LockPolicy

logger = logging.getLogger(__name__)


# Cached instances
_lock = threading.Lock()
_resource_catalog: ResourceCatalog | None = None
_lock_policy: LockPolicy | None = None


def _load(setting_name: str, protocol):
    path = getattr(supplyman_settings, setting_name)
    if not path:
        raise ImproperlyConfigured(f"SUPPLYMAN['{setting_name}'] must be configured.")

    try:
        instance = import_string(path)()
    except ImportError as e:
        raise ImproperlyConfigured(
            f"Failed to import {setting_name} '{path}': {e}"
        ) from e

    if not isinstance(instance, protocol):
        raise ImproperlyConfigured(
            f"SUPPLYMAN['{setting_name}'] '{path}' does not implement {protocol.__name__}"
        )

    logger.debug("Loaded %s: %s", setting_name, path)
    return instance


def get_resource_catalog() -> ResourceCatalog:
    """
    Return the configured resource catalog.

    Raises:
        ImproperlyConfigured: If RESOURCE_CATALOG is empty or import fails
    """
    global _resource_catalog

    if _resource_catalog is None:
        with _lock:
            if _resource_catalog is None:  # double-checked
                _resource_catalog = _load('RESOURCE_CATALOG', ResourceCatalog)

    return _resource_catalog


def get_lock_policy() -> LockPolicy:
    """
    Return the configured lock policy.

    Raises:
        ImproperlyConfigured: If LOCK_POLICY is empty or import fails
    """
    global _lock_policy

    if _lock_policy is None:
        with _lock:
            if _lock_policy is None:
                _lock_policy = _load('LOCK_POLICY', LockPolicy)

    return _lock_policy


def reset_adapters() -> None:
    """Reset the cached adapters. Useful for testing."""
    global _resource_catalog, _lock_policy
    _resource_catalog = None
    _lock_policy = None
