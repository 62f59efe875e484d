"""IPSetService — append/remove/show wrapped in ServiceResult.

Translates the mutation error hierarchy into stable error codes:

* ``GET_FAILED`` — the set could not be read
* ``UPDATE_FAILED`` — the write failed for a non-conflict reason
* ``RETRY_EXHAUSTED`` — every attempt lost the lock-token race
* ``CANCELLED`` — the caller cancelled mid-operation
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from ipsetctl.domain.types import MutationKind, Scope
from ipsetctl.infrastructure.store import StoreError
from ipsetctl.services.base import BaseService
from ipsetctl.services.errors import (
    IPSetMutationError,
    IPSetReadError,
    IPSetWriteError,
    MutationCancelledError,
    RetryExhaustedError,
)
from ipsetctl.services.mutation import append_to_ip_set, remove_from_ip_set
from ipsetctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from ipsetctl.infrastructure.store import IPSetStore
    from ipsetctl.services.mutation import MutationOutcome
    from ipsetctl.services.retry import OptimisticRetry


def _error_for(exc: IPSetMutationError) -> ServiceError:
    cause = exc.__cause__
    detail: dict[str, Any] = {}
    if cause is not None:
        detail["cause"] = type(cause).__name__
    if isinstance(exc, RetryExhaustedError):
        return ServiceError(
            code="RETRY_EXHAUSTED",
            message=str(exc),
            detail={**detail, "attempts": exc.attempts},
        )
    if isinstance(exc, MutationCancelledError):
        return ServiceError(code="CANCELLED", message=str(exc), detail=detail)
    if isinstance(exc, IPSetReadError):
        return ServiceError(code="GET_FAILED", message=str(exc), detail=detail)
    if isinstance(exc, IPSetWriteError):
        return ServiceError(code="UPDATE_FAILED", message=str(exc), detail=detail)
    return ServiceError(code="MUTATION_FAILED", message=str(exc), detail=detail)


class IPSetService(BaseService):
    """CIDR membership changes for IP sets within one fixed scope."""

    def __init__(
        self,
        store: IPSetStore,
        *,
        scope: Scope | str = Scope.REGIONAL,
        retry: OptimisticRetry | None = None,
        skip_unchanged_write: bool = False,
        cancel: threading.Event | None = None,
    ) -> None:
        super().__init__(store)
        self.scope = Scope(scope)
        self._retry = retry
        self._skip_unchanged_write = skip_unchanged_write
        self._cancel = cancel

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def append(self, ip_set_id: str, ip_set_name: str, cidr: str) -> ServiceResult:
        """Add *cidr* to the set if it is not already there."""
        return self._mutate(MutationKind.APPEND, ip_set_id, ip_set_name, cidr)

    def remove(self, ip_set_id: str, ip_set_name: str, cidr: str) -> ServiceResult:
        """Remove the first occurrence of *cidr* from the set."""
        return self._mutate(MutationKind.REMOVE, ip_set_id, ip_set_name, cidr)

    def show(self, ip_set_id: str, ip_set_name: str) -> ServiceResult:
        """Read the current addresses and lock token."""
        op = "show"
        try:
            state = self._store.get_ip_set(ip_set_id, ip_set_name, self.scope)
        except StoreError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="GET_FAILED",
                    message=f"ipset: get ip set {ip_set_name} ({ip_set_id}): {exc}",
                    detail={"cause": type(exc).__name__},
                ),
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **self._target_data(ip_set_id, ip_set_name),
                "addresses": list(state.addresses),
                "count": len(state.addresses),
                "lock_token": state.lock_token,
            },
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _mutate(
        self, kind: MutationKind, ip_set_id: str, ip_set_name: str, cidr: str
    ) -> ServiceResult:
        op = str(kind)
        mutate = append_to_ip_set if kind is MutationKind.APPEND else remove_from_ip_set
        try:
            outcome: MutationOutcome = mutate(
                self._store,
                ip_set_id,
                ip_set_name,
                cidr,
                scope=self.scope,
                retry=self._retry,
                cancel=self._cancel,
                skip_unchanged_write=self._skip_unchanged_write,
            )
        except IPSetMutationError as exc:
            return ServiceResult(ok=False, op=op, error=_error_for(exc))

        warnings: list[str] = []
        if not outcome.changed:
            if kind is MutationKind.APPEND:
                warnings.append(f"{cidr} already present in {ip_set_name}")
            else:
                warnings.append(f"{cidr} not present in {ip_set_name}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                **self._target_data(ip_set_id, ip_set_name),
                "cidr": cidr,
                "addresses": list(outcome.addresses),
                "changed": outcome.changed,
                "written": outcome.written,
            },
            warnings=warnings,
            meta={"attempts": outcome.attempts},
        )

    def _target_data(self, ip_set_id: str, ip_set_name: str) -> dict[str, Any]:
        return {"id": ip_set_id, "name": ip_set_name, "scope": str(self.scope)}
