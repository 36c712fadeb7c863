"""
Supplyman Adapters.

Implementations of protocols for external systems.
"""

from supplyman.adapters.loader import get_lock_policy, get_resource_catalog, reset_adapters
from supplyman.adapters.locks import AnyLockPolicy, LineFlagsLockPolicy
from supplyman.adapters.noop import NoopResourceCatalog

__all__ = [
    "AnyLockPolicy",
    "LineFlagsLockPolicy",
    "NoopResourceCatalog",
    "get_lock_policy",
    "get_resource_catalog",
    "reset_adapters",
]
