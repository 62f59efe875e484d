"""The store contract every IP set backend fulfils.

A store offers exactly two calls: read the current addresses with their
lock token, and conditionally write a new address list against a token.
A write whose token is stale raises :class:`VersionConflictError`; every
other failure raises some other :class:`StoreError`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


class StoreError(Exception):
    """Any failure reported by an IP set store."""


class VersionConflictError(StoreError):
    """The supplied lock token no longer matches the stored one."""


class IPSetNotFoundError(StoreError):
    """No IP set exists for the given id/name/scope."""


@dataclass(frozen=True)
class IPSetState:
    """Snapshot of an IP set as returned by a read."""

    addresses: tuple[str, ...] = field(default_factory=tuple)
    lock_token: str = ""


@runtime_checkable
class IPSetStore(Protocol):
    """Read/conditional-write access to versioned IP sets."""

    def get_ip_set(self, ip_set_id: str, name: str, scope: str) -> IPSetState: ...

    def update_ip_set(
        self,
        ip_set_id: str,
        name: str,
        scope: str,
        lock_token: str,
        addresses: Sequence[str],
    ) -> None: ...
