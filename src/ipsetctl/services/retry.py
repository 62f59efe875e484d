"""Optimistic-retry controller for lock-token conflicts.

A mutation attempt that loses the race for the lock token is retried
from scratch: the operation re-reads the set, so every retry writes
against the freshest token and membership. Conflicts are retried up to
``max_retries`` times with a uniformly random pause between attempts;
every other failure propagates immediately.

State per invocation::

    Start -> Attempt -> Success
                     -> NonConflictFailure
                     -> ConflictFailure -> Backoff -> Attempt
                                        -> BudgetExhausted
"""

from __future__ import annotations

import dataclasses
import random
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from ipsetctl.services.errors import (
    MutationCancelledError,
    RetryExhaustedError,
    is_version_conflict,
)

if TYPE_CHECKING:
    from ipsetctl.domain.ipset import IPSetTarget
    from ipsetctl.infrastructure.store import IPSetStore
    from ipsetctl.services.mutation import MutationOperation, MutationOutcome

_rng = random.Random()
_rng_lock = threading.Lock()


@dataclasses.dataclass(frozen=True)
class RetryPolicy:
    """Conflict retry budget and backoff window (milliseconds, inclusive)."""

    max_retries: int = 3
    min_backoff_ms: int = 100
    max_backoff_ms: int = 200

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            msg = f"max_retries must be >= 0, got {self.max_retries}"
            raise ValueError(msg)
        if not 0 <= self.min_backoff_ms <= self.max_backoff_ms:
            msg = (
                f"Backoff window must satisfy 0 <= min <= max, "
                f"got [{self.min_backoff_ms}, {self.max_backoff_ms}]"
            )
            raise ValueError(msg)


def uniform_jitter(policy: RetryPolicy) -> float:
    """Random whole-millisecond delay in the policy window, in seconds."""
    with _rng_lock:
        delay_ms = _rng.randint(policy.min_backoff_ms, policy.max_backoff_ms)
    return delay_ms / 1000


def interruptible_sleep(seconds: float, cancel: threading.Event | None) -> bool:
    """Sleep for *seconds*; return True if *cancel* fired first."""
    if cancel is None:
        time.sleep(seconds)
        return False
    return cancel.wait(seconds)


class OptimisticRetry:
    """Re-run a mutation operation while it fails with a version conflict.

    Args:
        policy: Retry budget and backoff window.
        jitter: Returns the next backoff delay in seconds. Defaults to
            :func:`uniform_jitter` over *policy*.
        sleep: Waits for a delay, returning True when cancelled. Defaults
            to :func:`interruptible_sleep`.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        jitter: Callable[[], float] | None = None,
        sleep: Callable[[float, threading.Event | None], bool] | None = None,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self._jitter = jitter or (lambda: uniform_jitter(self.policy))
        self._sleep = sleep or interruptible_sleep

    def run(
        self,
        operation: MutationOperation,
        store: IPSetStore,
        target: IPSetTarget,
        cidr: str,
        *,
        cancel: threading.Event | None = None,
        **op_kwargs: Any,
    ) -> MutationOutcome:
        """Invoke *operation* until it succeeds, fails otherwise, or runs out of budget.

        Returns the successful attempt's outcome with ``attempts`` filled in.

        Raises:
            RetryExhaustedError: More than ``max_retries`` conflicts in a row.
                The last conflict failure is chained as ``__cause__``.
            MutationCancelledError: *cancel* was set before an attempt, between
                an attempt's read and write, or during a backoff sleep.
            IPSetMutationError: Any non-conflict failure, unchanged.
        """
        log = structlog.get_logger(__name__).bind(ip_set=target.name, cidr=cidr)
        conflicts = 0
        while True:
            if cancel is not None and cancel.is_set():
                log.info("ipset.cancelled", attempts=conflicts)
                msg = f"Mutation of IP set {target.name} cancelled after {conflicts} attempt(s)"
                raise MutationCancelledError(msg)

            try:
                outcome = operation(store, target, cidr, cancel=cancel, **op_kwargs)
            except MutationCancelledError:
                log.info("ipset.cancelled", attempts=conflicts + 1)
                raise
            except Exception as exc:
                if not is_version_conflict(exc):
                    raise
                conflicts += 1
                if conflicts > self.policy.max_retries:
                    log.warning("ipset.retry_exhausted", attempts=conflicts)
                    msg = (
                        f"IP set {target.name} still conflicting after "
                        f"{conflicts} attempt(s): {exc}"
                    )
                    raise RetryExhaustedError(msg, attempts=conflicts) from exc

                delay = self._jitter()
                log.info("ipset.conflict", attempt=conflicts, delay_ms=round(delay * 1000))
                if self._sleep(delay, cancel):
                    log.info("ipset.cancelled", attempts=conflicts)
                    msg = f"Mutation of IP set {target.name} cancelled during backoff"
                    raise MutationCancelledError(msg) from exc
                continue

            return dataclasses.replace(outcome, attempts=conflicts + 1)
