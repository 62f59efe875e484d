"""Single-attempt read-modify-write mutations and their public entry points.

``append_once`` and ``remove_once`` each perform one cycle: read the
current addresses and lock token, apply the rule, then write the full
list back against that token. They never retry; wrap them in
:class:`~ipsetctl.services.retry.OptimisticRetry` for that, which is
what :func:`append_to_ip_set` and :func:`remove_from_ip_set` do.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from ipsetctl.domain.ipset import IPSetTarget, with_cidr, without_cidr
from ipsetctl.domain.types import Scope
from ipsetctl.infrastructure.store import IPSetStore, StoreError
from ipsetctl.services.errors import IPSetReadError, IPSetWriteError, MutationCancelledError
from ipsetctl.services.retry import OptimisticRetry, RetryPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationOutcome:
    """What a successful mutation did.

    Attributes:
        addresses: Address list submitted (or left in place) by the final attempt.
        changed: Whether the list differs from what was read.
        written: Whether the conditional write was issued.
        attempts: Attempts used, including the successful one.
    """

    addresses: tuple[str, ...]
    changed: bool
    written: bool
    attempts: int = 1


class MutationOperation(Protocol):
    def __call__(
        self,
        store: IPSetStore,
        target: IPSetTarget,
        cidr: str,
        *,
        cancel: threading.Event | None = None,
        skip_unchanged_write: bool = False,
    ) -> MutationOutcome: ...


def _read_modify_write(
    store: IPSetStore,
    target: IPSetTarget,
    cidr: str,
    rule: Callable[[Sequence[str], str], list[str]],
    *,
    cancel: threading.Event | None,
    skip_unchanged_write: bool,
) -> MutationOutcome:
    try:
        current = store.get_ip_set(target.id, target.name, target.scope)
    except StoreError as exc:
        msg = f"ipset: get ip set {target.name} ({target.id}): {exc}"
        raise IPSetReadError(msg) from exc

    if cancel is not None and cancel.is_set():
        msg = f"Mutation of IP set {target.name} cancelled before update"
        raise MutationCancelledError(msg)

    addresses = rule(current.addresses, cidr)
    changed = addresses != list(current.addresses)
    if not changed and skip_unchanged_write:
        logger.debug("IP set %s already in desired state; write skipped", target.name)
        return MutationOutcome(addresses=current.addresses, changed=False, written=False)

    try:
        store.update_ip_set(target.id, target.name, target.scope, current.lock_token, addresses)
    except StoreError as exc:
        msg = f"ipset: update ip set {target.name} ({target.id}): {exc}"
        raise IPSetWriteError(msg) from exc

    logger.debug("IP set %s written with %d addresses", target.name, len(addresses))
    return MutationOutcome(addresses=tuple(addresses), changed=changed, written=True)


def append_once(
    store: IPSetStore,
    target: IPSetTarget,
    cidr: str,
    *,
    cancel: threading.Event | None = None,
    skip_unchanged_write: bool = False,
) -> MutationOutcome:
    """One append cycle. Adds *cidr* at the end unless already present."""
    return _read_modify_write(
        store, target, cidr, with_cidr, cancel=cancel, skip_unchanged_write=skip_unchanged_write
    )


def remove_once(
    store: IPSetStore,
    target: IPSetTarget,
    cidr: str,
    *,
    cancel: threading.Event | None = None,
    skip_unchanged_write: bool = False,
) -> MutationOutcome:
    """One remove cycle. Drops the first entry equal to *cidr*.

    The unchanged list is still written back when *cidr* is absent,
    unless *skip_unchanged_write* is set.
    """
    return _read_modify_write(
        store, target, cidr, without_cidr, cancel=cancel, skip_unchanged_write=skip_unchanged_write
    )


def append_to_ip_set(
    store: IPSetStore,
    ip_set_id: str,
    ip_set_name: str,
    cidr: str,
    *,
    scope: Scope | str = Scope.REGIONAL,
    retry: OptimisticRetry | None = None,
    cancel: threading.Event | None = None,
    skip_unchanged_write: bool = False,
) -> MutationOutcome:
    """Append *cidr* to the IP set, retrying lock-token conflicts.

    Raises:
        IPSetReadError: The set could not be read.
        IPSetWriteError: The write failed for a reason other than a conflict.
        RetryExhaustedError: Conflicts outlasted the retry budget.
        MutationCancelledError: *cancel* fired.
    """
    target = IPSetTarget(id=ip_set_id, name=ip_set_name, scope=Scope(scope))
    controller = retry or OptimisticRetry(RetryPolicy())
    return controller.run(
        append_once,
        store,
        target,
        cidr,
        cancel=cancel,
        skip_unchanged_write=skip_unchanged_write,
    )


def remove_from_ip_set(
    store: IPSetStore,
    ip_set_id: str,
    ip_set_name: str,
    cidr: str,
    *,
    scope: Scope | str = Scope.REGIONAL,
    retry: OptimisticRetry | None = None,
    cancel: threading.Event | None = None,
    skip_unchanged_write: bool = False,
) -> MutationOutcome:
    """Remove *cidr* from the IP set, retrying lock-token conflicts.

    Raises the same errors as :func:`append_to_ip_set`.
    """
    target = IPSetTarget(id=ip_set_id, name=ip_set_name, scope=Scope(scope))
    controller = retry or OptimisticRetry(RetryPolicy())
    return controller.run(
        remove_once,
        store,
        target,
        cidr,
        cancel=cancel,
        skip_unchanged_write=skip_unchanged_write,
    )
