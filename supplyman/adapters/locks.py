"""
Lock policies for detail lines.

LineFlagsLockPolicy reads the two markers stored on the line itself.
AnyLockPolicy combines several policies, so a payments module can add its
own predicate without losing the built-in ones:

    SUPPLYMAN = {"LOCK_POLICY": "payments.adapters.locks.PaymentAwareLockPolicy"}

    class PaymentAwareLockPolicy(AnyLockPolicy):
        def __init__(self):
            super().__init__(LineFlagsLockPolicy(), PaymentLockPolicy())
"""

from __future__ import annotations

from supplyman.models.enums import LockReason


class LineFlagsLockPolicy:
    """Locked when the line is soft-removed or settled."""

    def lock_reason(self, line) -> str | None:
        if line.is_removed:
            return LockReason.REMOVED.value
        if line.is_settled:
            return LockReason.SETTLED.value
        return None

    def is_locked(self, line) -> bool:
        return self.lock_reason(line) is not None


class AnyLockPolicy:
    """Locked when any of the wrapped policies says so (first reason wins)."""

    def __init__(self, *policies):
        self.policies = policies

    def lock_reason(self, line) -> str | None:
        for policy in self.policies:
            if policy.is_locked(line):
                return policy.lock_reason(line) or 'locked'
        return None

    def is_locked(self, line) -> bool:
        return any(policy.is_locked(line) for policy in self.policies)
