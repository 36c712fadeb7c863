"""
Supplyman Protocols.

Defines interfaces for external system integration.
"""

from supplyman.protocols.catalog import ResourceCatalog, ResourceInfo
from supplyman.protocols.locking import LockPolicy

__all__ = [
    "LockPolicy",
    "ResourceCatalog",
    "ResourceInfo",
]
