"""
Noop Resource Catalog — stub adapter for development and testing.

This adapter implements the ResourceCatalog protocol with trivial defaults:
- Every resource exists
- Resource info carries no unit, so lines are never converted

Usage in settings.py:
    SUPPLYMAN = {
        "RESOURCE_CATALOG": "supplyman.adapters.noop.NoopResourceCatalog",
    }

WARNING: Do NOT use in production. Stock reversals on removal are never
skipped and unknown resources are accepted.
"""

from __future__ import annotations

from supplyman.protocols.catalog import ResourceInfo


class NoopResourceCatalog:
    """No-operation catalog: every resource exists."""

    def exists(self, resource_id: str) -> bool:
        return True

    def get_resource(self, resource_id: str) -> ResourceInfo | None:
        return ResourceInfo(resource_id=resource_id, name=resource_id)
