"""ServiceResult and ServiceError — what every service call hands back.

The CLI never sees raw exceptions from the mutation layer; services
translate them into a ServiceResult with a stable error ``code``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Failure details: a machine-readable code plus a human message."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"append"``, ``"remove"``, ``"show"``).
        data: IP set identifiers and resulting addresses on success.
        warnings: Non-fatal notes (e.g. CIDR already present).
        error: Populated when ``ok`` is False.
        meta: Attempt counts and similar bookkeeping.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
