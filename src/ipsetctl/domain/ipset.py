"""IP set targets and the address-list rules behind append/remove.

Membership is exact string equality. ``10.0.0.1/32`` and ``10.0.0.1/32 ``
are different entries, as are ``2001:db8::/32`` and ``2001:DB8::/32``.
Lists are never normalized, sorted, or deduplicated here.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel

from ipsetctl.domain.types import Scope


class IPSetTarget(BaseModel):
    """Identifies one IP set in the store."""

    model_config = {"frozen": True}

    id: str
    name: str
    scope: Scope = Scope.REGIONAL


def with_cidr(addresses: Sequence[str], cidr: str) -> list[str]:
    """Return *addresses* with *cidr* appended unless already present.

    Pre-existing duplicates are left alone.

    Examples:
        >>> with_cidr(["192.0.2.1/32"], "192.0.2.44/32")
        ['192.0.2.1/32', '192.0.2.44/32']
        >>> with_cidr(["192.0.2.44/32"], "192.0.2.44/32")
        ['192.0.2.44/32']
    """
    result = list(addresses)
    if cidr not in result:
        result.append(cidr)
    return result


def without_cidr(addresses: Sequence[str], cidr: str) -> list[str]:
    """Return *addresses* minus the first entry equal to *cidr*.

    Later duplicates survive; the rest keep their relative order.

    Examples:
        >>> without_cidr(["A", "X", "B", "X"], "X")
        ['A', 'B', 'X']
        >>> without_cidr(["A", "B"], "X")
        ['A', 'B']
    """
    result = list(addresses)
    for i, entry in enumerate(result):
        if entry == cidr:
            del result[i]
            break
    return result
