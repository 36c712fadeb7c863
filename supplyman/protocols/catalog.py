"""
Resource Catalog Protocol — interface for the supplies catalog.

Supplyman defines this protocol, the module that owns supplies implements it.
The catalog answers two questions: does the resource still exist, and in
which unit is its stock kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ResourceInfo:
    """Basic resource information."""

    resource_id: str
    name: str
    unit: str = ""  # "g", "ml", "mm"... empty = not informed
    is_active: bool = True


@runtime_checkable
class ResourceCatalog(Protocol):
    """
    Protocol for resource lookups.

    exists() is consulted when a document is removed: lines whose
    resource was deleted independently skip their stock reversal.
    """

    def exists(self, resource_id: str) -> bool:
        """
        Check whether the resource still exists.

        Args:
            resource_id: Resource code

        Returns:
            False if the resource was deleted
        """
        ...

    def get_resource(self, resource_id: str) -> ResourceInfo | None:
        """
        Get resource information.

        Args:
            resource_id: Resource code

        Returns:
            ResourceInfo or None if not found
        """
        ...
