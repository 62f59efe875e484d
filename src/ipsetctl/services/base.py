"""BaseService — shared constructor for services backed by an IP set store."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ipsetctl.infrastructure.store import IPSetStore


class BaseService:
    """Holds the injected store client.

    Subclasses never construct their own store; the caller decides
    whether it talks to WAFv2, an in-memory store, or a test double.
    """

    def __init__(self, store: IPSetStore) -> None:
        self._store = store

    @property
    def store(self) -> IPSetStore:
        return self._store
