"""
Tests for detail-set reconciliation (pure, no database).
"""

from supplyman.services.reconcile import ReconciliationPlan, reconcile


class TestReconcile:
    """Tests for reconcile()."""

    def test_common_elements(self):
        """Ids on both sides update, old-only delete, new-only create."""
        plan = reconcile(old_ids=[2, 3, 4], new_ids=[1, 2, 3])

        assert plan.to_create == (1,)
        assert plan.to_update == (2, 3)
        assert plan.to_delete == (4,)

    def test_no_common_elements(self):
        plan = reconcile([4, 5, 6], [1, 2, 3])

        assert plan.to_create == (1, 2, 3)
        assert plan.to_update == ()
        assert plan.to_delete == (4, 5, 6)

    def test_empty_old(self):
        plan = reconcile([], [1, 2, 3])

        assert plan.to_create == (1, 2, 3)
        assert plan.to_update == ()
        assert plan.to_delete == ()

    def test_empty_new(self):
        plan = reconcile([1, 2, 3], [])

        assert plan.to_delete == (1, 2, 3)
        assert plan.to_create == ()
        assert plan.to_update == ()

    def test_both_empty(self):
        plan = reconcile([], [])

        assert plan == ReconciliationPlan()
        assert plan.is_empty

    def test_absent_ids_are_always_created(self):
        """Lines without id never collapse: one None per new line."""
        plan = reconcile([1], [None, 1, None])

        assert plan.to_create == (None, None)
        assert plan.to_update == (1,)
        assert plan.to_delete == ()

    def test_duplicates_collapse(self):
        plan = reconcile([1, 1, 2], [2, 2, 3, 3])

        assert plan.to_create == (3,)
        assert plan.to_update == (2,)
        assert plan.to_delete == (1,)

    def test_first_seen_order(self):
        """Output order follows first appearance, not sorting."""
        plan = reconcile([9, 3, 7, 1], [7, None, 5, 3])

        assert plan.to_update == (7, 3)
        assert plan.to_delete == (9, 1)
        assert plan.to_create == (None, 5)

    def test_sets_are_disjoint(self):
        plan = reconcile(['a', 'b', 'c'], ['b', 'd', None])
        created = {i for i in plan.to_create if i is not None}

        assert created.isdisjoint(plan.to_update)
        assert created.isdisjoint(plan.to_delete)
        assert set(plan.to_update).isdisjoint(plan.to_delete)

    def test_idempotent(self):
        """Same input, same plan."""
        old, new = ['x', 'y', 'z'], ['z', None, 'w', 'x']

        assert reconcile(old, new) == reconcile(old, new)

    def test_accepts_generators(self):
        plan = reconcile((i for i in [1, 2]), (i for i in [2, 3]))

        assert plan.to_update == (2,)

    def test_summary(self):
        plan = reconcile([1, 2], [2, None, None])

        assert plan.summary() == {'create': 2, 'update': 1, 'delete': 1}
        assert not plan.is_empty
