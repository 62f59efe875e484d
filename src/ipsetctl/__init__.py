"""ipsetctl — idempotent CIDR mutation for versioned IP sets."""

from __future__ import annotations

__version__ = "0.1.0"

from ipsetctl.services.mutation import append_to_ip_set, remove_from_ip_set  # noqa: E402

__all__ = ["__version__", "append_to_ip_set", "remove_from_ip_set"]
