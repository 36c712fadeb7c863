"""
Tests for adapter loading and lock policies.
"""

import pytest
from django.core.exceptions import ImproperlyConfigured

from supplyman.adapters import (
    AnyLockPolicy,
    LineFlagsLockPolicy,
    NoopResourceCatalog,
    get_lock_policy,
    get_resource_catalog,
    reset_adapters,
)
from supplyman.models import DetailLine
from supplyman.protocols import LockPolicy, ResourceCatalog


class NotACatalog:
    pass


class TestLoader:
    """Tests for get_resource_catalog() / get_lock_policy()."""

    def test_defaults(self):
        assert isinstance(get_resource_catalog(), NoopResourceCatalog)
        assert isinstance(get_lock_policy(), LineFlagsLockPolicy)

    def test_instances_are_cached(self):
        assert get_resource_catalog() is get_resource_catalog()
        assert get_lock_policy() is get_lock_policy()

    def test_reset_reloads(self):
        catalog = get_resource_catalog()
        reset_adapters()

        assert get_resource_catalog() is not catalog

    def test_custom_lock_policy(self, settings):
        settings.SUPPLYMAN = {'LOCK_POLICY': 'supplyman.adapters.locks.AnyLockPolicy'}

        assert isinstance(get_lock_policy(), AnyLockPolicy)

    def test_empty_path(self, settings):
        settings.SUPPLYMAN = {'RESOURCE_CATALOG': ''}

        with pytest.raises(ImproperlyConfigured):
            get_resource_catalog()

    def test_import_failure(self, settings):
        settings.SUPPLYMAN = {'RESOURCE_CATALOG': 'supplies.missing.Catalog'}

        with pytest.raises(ImproperlyConfigured, match='RESOURCE_CATALOG'):
            get_resource_catalog()

    def test_wrong_protocol(self, settings):
        settings.SUPPLYMAN = {
            'RESOURCE_CATALOG': 'supplyman.tests.test_adapters.NotACatalog',
        }

        with pytest.raises(ImproperlyConfigured, match='ResourceCatalog'):
            get_resource_catalog()


class TestNoopCatalog:
    def test_every_resource_exists(self):
        catalog = NoopResourceCatalog()

        assert isinstance(catalog, ResourceCatalog)
        assert catalog.exists('anything')
        info = catalog.get_resource('R')
        assert info.resource_id == 'R'
        assert info.unit == ''


class TestLockPolicies:
    """Tests for LineFlagsLockPolicy and AnyLockPolicy (no database)."""

    def test_free_line(self):
        policy = LineFlagsLockPolicy()
        line = DetailLine(resource_id='R', quantity=1)

        assert isinstance(policy, LockPolicy)
        assert not policy.is_locked(line)
        assert policy.lock_reason(line) is None

    def test_removed_wins_over_settled(self):
        policy = LineFlagsLockPolicy()
        line = DetailLine(resource_id='R', quantity=1, is_removed=True, is_settled=True)

        assert policy.is_locked(line)
        assert policy.lock_reason(line) == 'removed'

    def test_settled(self):
        line = DetailLine(resource_id='R', quantity=1, is_settled=True)

        assert LineFlagsLockPolicy().lock_reason(line) == 'settled'

    def test_any_policy(self):
        class Reserved:
            def is_locked(self, line):
                return line.metadata.get('reserved', False)

            def lock_reason(self, line):
                return None

        policy = AnyLockPolicy(LineFlagsLockPolicy(), Reserved())
        reserved = DetailLine(resource_id='R', quantity=1, metadata={'reserved': True})
        free = DetailLine(resource_id='R', quantity=1, metadata={})

        assert policy.is_locked(reserved)
        assert policy.lock_reason(reserved) == 'locked'
        assert not policy.is_locked(free)
        assert policy.lock_reason(free) is None

    def test_empty_any_policy_locks_nothing(self):
        line = DetailLine(resource_id='R', quantity=1, is_settled=True)

        assert not AnyLockPolicy().is_locked(line)
