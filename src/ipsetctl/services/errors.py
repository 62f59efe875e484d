"""Failure kinds surfaced by IP set mutations.

Callers can tell apart "could not read", "could not write: conflict
budget exhausted", "could not write: other" and "cancelled" by type.
The store error that triggered a failure is always chained as
``__cause__``.
"""

from __future__ import annotations

from ipsetctl.infrastructure.store import VersionConflictError


class IPSetMutationError(Exception):
    """Base class for every failed append/remove."""


class IPSetReadError(IPSetMutationError):
    """Reading the current addresses and lock token failed."""


class IPSetWriteError(IPSetMutationError):
    """The conditional write failed (conflict or otherwise)."""


class RetryExhaustedError(IPSetMutationError):
    """Every attempt hit a version conflict."""

    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class MutationCancelledError(IPSetMutationError):
    """The caller cancelled before the mutation completed."""


def is_version_conflict(exc: BaseException) -> bool:
    """True if *exc* or anything in its ``__cause__`` chain is a version conflict."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, VersionConflictError):
            return True
        seen.add(id(current))
        current = current.__cause__
    return False
