"""Command: append a CIDR to an IP set."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ipsetctl.commands._base import IpsCommand

if TYPE_CHECKING:
    from ipsetctl.commands._context import AppContext


@click.command(
    cls=IpsCommand,
    examples="""\
  ipsetctl append 1a2b3c4d-5678-90ab-cdef-1234567890ab blocklist 192.0.2.44/32
  ipsetctl --json append 1a2b3c4d-5678-90ab-cdef-1234567890ab blocklist 2001:db8::/32""",
)
@click.argument("ip_set_id")
@click.argument("ip_set_name")
@click.argument("cidr")
@click.pass_obj
def append(app: AppContext, ip_set_id: str, ip_set_name: str, cidr: str) -> None:
    """Append CIDR to an IP set unless it is already present."""
    app.emit(app.ipset_service().append(ip_set_id, ip_set_name, cidr))
