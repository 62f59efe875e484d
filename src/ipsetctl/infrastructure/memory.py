"""InMemoryIPSetStore — process-local store honouring lock tokens.

Every successful write issues a fresh token, so concurrent writers
racing on the same set see :class:`VersionConflictError` exactly as they
would against a remote store.
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Sequence

from ipsetctl.infrastructure.store import (
    IPSetNotFoundError,
    IPSetState,
    VersionConflictError,
)


class InMemoryIPSetStore:
    """Thread-safe dict-backed store keyed by ``(scope, id)``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sets: dict[tuple[str, str], tuple[str, list[str], str]] = {}
        self.reads = 0
        self.writes = 0

    def create_ip_set(
        self,
        name: str,
        scope: str,
        addresses: Sequence[str] = (),
        *,
        ip_set_id: str | None = None,
    ) -> str:
        """Register a new set and return its id."""
        set_id = ip_set_id or uuid.uuid4().hex
        with self._lock:
            self._sets[(scope, set_id)] = (name, list(addresses), uuid.uuid4().hex)
        return set_id

    def get_ip_set(self, ip_set_id: str, name: str, scope: str) -> IPSetState:
        with self._lock:
            self.reads += 1
            _, addresses, token = self._lookup(ip_set_id, name, scope)
            return IPSetState(addresses=tuple(addresses), lock_token=token)

    def update_ip_set(
        self,
        ip_set_id: str,
        name: str,
        scope: str,
        lock_token: str,
        addresses: Sequence[str],
    ) -> None:
        with self._lock:
            self.writes += 1
            stored_name, _, token = self._lookup(ip_set_id, name, scope)
            if lock_token != token:
                msg = f"Lock token {lock_token!r} is stale for IP set {ip_set_id}"
                raise VersionConflictError(msg)
            self._sets[(scope, ip_set_id)] = (stored_name, list(addresses), uuid.uuid4().hex)

    def _lookup(self, ip_set_id: str, name: str, scope: str) -> tuple[str, list[str], str]:
        entry = self._sets.get((scope, ip_set_id))
        if entry is None or entry[0] != name:
            msg = f"IP set not found: {name} ({ip_set_id}) in {scope}"
            raise IPSetNotFoundError(msg)
        return entry
