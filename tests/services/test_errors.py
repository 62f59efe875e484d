"""Tests for failure classification."""

from __future__ import annotations

from ipsetctl.infrastructure.store import StoreError, VersionConflictError
from ipsetctl.services.errors import (
    IPSetMutationError,
    IPSetReadError,
    IPSetWriteError,
    MutationCancelledError,
    RetryExhaustedError,
    is_version_conflict,
)


class TestIsVersionConflict:
    def test_direct(self) -> None:
        assert is_version_conflict(VersionConflictError("stale"))

    def test_through_cause_chain(self) -> None:
        inner = VersionConflictError("stale")
        middle = StoreError("wrapped")
        middle.__cause__ = inner
        outer = IPSetWriteError("ipset: update ip set")
        outer.__cause__ = middle
        assert is_version_conflict(outer)

    def test_other_store_error(self) -> None:
        outer = IPSetWriteError("ipset: update ip set")
        outer.__cause__ = StoreError("throttled")
        assert not is_version_conflict(outer)

    def test_context_is_not_cause(self) -> None:
        """Only explicit ``raise ... from`` chains count."""
        outer = IPSetWriteError("ipset: update ip set")
        outer.__context__ = VersionConflictError("stale")
        assert not is_version_conflict(outer)

    def test_message_is_ignored(self) -> None:
        assert not is_version_conflict(StoreError("WAFOptimisticLockException"))

    def test_cycle_terminates(self) -> None:
        a = StoreError("a")
        b = StoreError("b")
        a.__cause__ = b
        b.__cause__ = a
        assert not is_version_conflict(a)


def test_hierarchy() -> None:
    for cls in (IPSetReadError, IPSetWriteError, RetryExhaustedError, MutationCancelledError):
        assert issubclass(cls, IPSetMutationError)


def test_retry_exhausted_carries_attempts() -> None:
    err = RetryExhaustedError("still conflicting", attempts=4)
    assert err.attempts == 4
    assert str(err) == "still conflicting"
