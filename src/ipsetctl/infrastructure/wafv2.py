"""WAFv2IPSetStore -- AWS WAFv2 IP sets behind the store contract.

The boto3 client is created lazily on first use from the default
credential chain. Credential and session management are left to boto3.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ipsetctl.infrastructure.store import (
    IPSetNotFoundError,
    IPSetState,
    StoreError,
    VersionConflictError,
)

logger = logging.getLogger(__name__)

# botocore error codes -> store error classes
_ERROR_CODES: dict[str, type[StoreError]] = {
    "WAFOptimisticLockException": VersionConflictError,
    "WAFNonexistentItemException": IPSetNotFoundError,
}


def _create_client(region: str | None, endpoint_url: str | None) -> Any:
    import boto3

    kwargs: dict[str, Any] = {}
    if region:
        kwargs["region_name"] = region
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return boto3.client("wafv2", **kwargs)


def translate_client_error(exc: ClientError, action: str) -> StoreError:
    """Map a botocore ``ClientError`` onto the store error hierarchy."""
    error = exc.response.get("Error", {})
    code = error.get("Code", "Unknown")
    message = error.get("Message", str(exc))
    error_cls = _ERROR_CODES.get(code, StoreError)
    return error_cls(f"{action}: {code}: {message}")


class WAFv2IPSetStore:
    """Store client for AWS WAFv2 ``GetIPSet`` / ``UpdateIPSet``.

    Args:
        client: Pre-built boto3 ``wafv2`` client. Built on demand when omitted.
        region: AWS region for the lazily built client.
        endpoint_url: Override endpoint (e.g. a local emulator).
    """

    def __init__(
        self,
        client: Any = None,
        *,
        region: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._client = client
        self._region = region
        self._endpoint_url = endpoint_url

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = _create_client(self._region, self._endpoint_url)
        return self._client

    def get_ip_set(self, ip_set_id: str, name: str, scope: str) -> IPSetState:
        try:
            resp = self.client.get_ip_set(Name=name, Scope=scope, Id=ip_set_id)
        except ClientError as exc:
            raise translate_client_error(exc, "GetIPSet") from exc
        except BotoCoreError as exc:
            raise StoreError(f"GetIPSet: {exc}") from exc
        lock_token = resp.get("LockToken")
        if not lock_token:
            raise StoreError(f"GetIPSet: response for {ip_set_id} has no LockToken")
        addresses = resp.get("IPSet", {}).get("Addresses", [])
        logger.debug("GetIPSet %s returned %d addresses", ip_set_id, len(addresses))
        return IPSetState(addresses=tuple(addresses), lock_token=lock_token)

    def update_ip_set(
        self,
        ip_set_id: str,
        name: str,
        scope: str,
        lock_token: str,
        addresses: Sequence[str],
    ) -> None:
        try:
            self.client.update_ip_set(
                Name=name,
                Scope=scope,
                Id=ip_set_id,
                Addresses=list(addresses),
                LockToken=lock_token,
            )
        except ClientError as exc:
            raise translate_client_error(exc, "UpdateIPSet") from exc
        except BotoCoreError as exc:
            raise StoreError(f"UpdateIPSet: {exc}") from exc
