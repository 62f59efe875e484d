"""Shared pytest fixtures and test doubles for ipsetctl tests."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Generator, Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner

from ipsetctl.infrastructure.memory import InMemoryIPSetStore
from ipsetctl.infrastructure.store import IPSetState, StoreError
from ipsetctl.services.retry import OptimisticRetry, RetryPolicy

IP_SET_NAME = "test-ip-set"
SCOPE = "REGIONAL"


class RivalWriterStore:
    """Wraps a store; before the first *conflicts* writes, a rival writer wins.

    The rival rewrites the set with its current contents, which bumps the
    lock token, so the wrapped write fails with a genuine version conflict.
    """

    def __init__(self, inner: InMemoryIPSetStore, conflicts: int) -> None:
        self.inner = inner
        self.remaining = conflicts
        self.updates: list[list[str]] = []

    def get_ip_set(self, ip_set_id: str, name: str, scope: str) -> IPSetState:
        return self.inner.get_ip_set(ip_set_id, name, scope)

    def update_ip_set(
        self,
        ip_set_id: str,
        name: str,
        scope: str,
        lock_token: str,
        addresses: Sequence[str],
    ) -> None:
        self.updates.append(list(addresses))
        if self.remaining > 0:
            self.remaining -= 1
            rival = self.inner.get_ip_set(ip_set_id, name, scope)
            self.inner.update_ip_set(
                ip_set_id, name, scope, rival.lock_token, list(rival.addresses)
            )
        self.inner.update_ip_set(ip_set_id, name, scope, lock_token, addresses)


class FailingStore:
    """Store whose reads or writes raise a plain StoreError."""

    def __init__(
        self,
        inner: InMemoryIPSetStore,
        *,
        fail_get: bool = False,
        fail_update: bool = False,
    ) -> None:
        self.inner = inner
        self.fail_get = fail_get
        self.fail_update = fail_update
        self.gets = 0
        self.updates = 0

    def get_ip_set(self, ip_set_id: str, name: str, scope: str) -> IPSetState:
        self.gets += 1
        if self.fail_get:
            raise StoreError("AccessDenied: not allowed to read")
        return self.inner.get_ip_set(ip_set_id, name, scope)

    def update_ip_set(
        self,
        ip_set_id: str,
        name: str,
        scope: str,
        lock_token: str,
        addresses: Sequence[str],
    ) -> None:
        self.updates += 1
        if self.fail_update:
            raise StoreError("WAFInvalidParameterException: bad address")
        self.inner.update_ip_set(ip_set_id, name, scope, lock_token, addresses)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ips = logging.getLogger("ipsetctl")
    ips_level = ips.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    ips.setLevel(ips_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def store() -> InMemoryIPSetStore:
    return InMemoryIPSetStore()


@pytest.fixture
def ip_set_id(store: InMemoryIPSetStore) -> str:
    """An empty IP set registered in ``store``."""
    return store.create_ip_set(IP_SET_NAME, SCOPE)


@pytest.fixture
def delays() -> list[float]:
    """Backoff delays recorded by the ``fast_retry`` controller."""
    return []


@pytest.fixture
def fast_retry(delays: list[float]) -> OptimisticRetry:
    """Default retry policy with sleeps recorded instead of taken."""

    def record(seconds: float, cancel: threading.Event | None) -> bool:
        delays.append(seconds)
        return False

    return OptimisticRetry(RetryPolicy(), sleep=record)


@pytest.fixture
def rival_store(store: InMemoryIPSetStore) -> Callable[[int], RivalWriterStore]:
    """Factory: wrap ``store`` so the first N writes lose to a rival."""

    def make(conflicts: int) -> RivalWriterStore:
        return RivalWriterStore(store, conflicts)

    return make


@pytest.fixture
def failing_store(store: InMemoryIPSetStore) -> Callable[..., FailingStore]:
    """Factory: wrap ``store`` so reads and/or writes fail."""

    def make(*, fail_get: bool = False, fail_update: bool = False) -> FailingStore:
        return FailingStore(store, fail_get=fail_get, fail_update=fail_update)

    return make


@pytest.fixture
def _isolated_cli(
    store: InMemoryIPSetStore,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Route the CLI to ``store``, away from AWS and any real ipsetctl.toml."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("IPSETCTL_CONFIG", raising=False)
    monkeypatch.setenv("IPSETCTL_RETRY__MIN_BACKOFF_MS", "0")
    monkeypatch.setenv("IPSETCTL_RETRY__MAX_BACKOFF_MS", "0")
    monkeypatch.setattr("ipsetctl.commands._context.build_store", lambda settings: store)
