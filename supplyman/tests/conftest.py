"""
Pytest fixtures for Supplyman tests.
"""

from datetime import date, timedelta

import pytest

from supplyman import ledger
from supplyman.adapters import reset_adapters
from supplyman.models import Direction
from supplyman.protocols import ResourceInfo


class FakeCatalog:
    """In-memory ResourceCatalog: resources can be deleted to test skips."""

    def __init__(self, resources=None):
        self.resources = {info.resource_id: info for info in resources or []}
        self.deleted = set()

    def delete(self, resource_id):
        self.deleted.add(resource_id)

    def exists(self, resource_id):
        return resource_id in self.resources and resource_id not in self.deleted

    def get_resource(self, resource_id):
        if not self.exists(resource_id):
            return None
        return self.resources[resource_id]


@pytest.fixture(autouse=True)
def _reset_adapters():
    """Adapters are cached per process; start every test clean."""
    reset_adapters()
    yield
    reset_adapters()


@pytest.fixture
def catalog():
    """Catalog with a few supplies."""
    return FakeCatalog([
        ResourceInfo('R', 'Insumo R'),
        ResourceInfo('S', 'Insumo S'),
        ResourceInfo('ureia', 'Ureia', unit='g'),
        ResourceInfo('glifosato', 'Glifosato', unit='ml'),
    ])


@pytest.fixture
def today():
    """Return today's date."""
    return date.today()


@pytest.fixture
def yesterday():
    """Return yesterday's date."""
    return date.today() - timedelta(days=1)


@pytest.fixture
def purchase(db, today):
    """Purchase of 4500 R (amount R = 4500)."""
    return ledger.create_document(
        Direction.INCREASES_STOCK, today,
        [{'resource_id': 'R', 'quantity': 4500}],
        kind='compra',
    )


@pytest.fixture
def consumption(purchase, today):
    """Consumption of 2000 R after the purchase (amount R = 2500)."""
    return ledger.create_document(
        Direction.DECREASES_STOCK, today,
        [{'resource_id': 'R', 'quantity': 2000}],
        kind='consumo',
    )
