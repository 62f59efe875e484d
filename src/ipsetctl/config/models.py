"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``ipsetctl.toml`` only holds
overrides. A deployment pinned to CloudFront needs nothing more than::

    [store]
    scope = "CLOUDFRONT"
"""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from ipsetctl.domain.types import Scope


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    scope: Scope = Scope.REGIONAL
    region: str | None = None
    endpoint_url: str | None = None


class RetryConfig(BaseModel):
    """[retry] section."""

    model_config = {"frozen": True}

    max_retries: int = 3
    min_backoff_ms: int = 100
    max_backoff_ms: int = 200

    @model_validator(mode="after")
    def _check_window(self) -> RetryConfig:
        if self.max_retries < 0:
            msg = "retry.max_retries must be >= 0"
            raise ValueError(msg)
        if not 0 <= self.min_backoff_ms <= self.max_backoff_ms:
            msg = "retry backoff window must satisfy 0 <= min_backoff_ms <= max_backoff_ms"
            raise ValueError(msg)
        return self


class MutationConfig(BaseModel):
    """[mutation] section."""

    model_config = {"frozen": True}

    skip_unchanged_write: bool = False
