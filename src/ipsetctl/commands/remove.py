"""Command: remove a CIDR from an IP set."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ipsetctl.commands._base import IpsCommand

if TYPE_CHECKING:
    from ipsetctl.commands._context import AppContext


@click.command(
    cls=IpsCommand,
    examples="""\
  ipsetctl remove 1a2b3c4d-5678-90ab-cdef-1234567890ab blocklist 192.0.2.44/32
  ipsetctl --json remove 1a2b3c4d-5678-90ab-cdef-1234567890ab blocklist 2001:db8::/32""",
)
@click.argument("ip_set_id")
@click.argument("ip_set_name")
@click.argument("cidr")
@click.pass_obj
def remove(app: AppContext, ip_set_id: str, ip_set_name: str, cidr: str) -> None:
    """Remove the first occurrence of CIDR from an IP set."""
    app.emit(app.ipset_service().remove(ip_set_id, ip_set_name, cidr))
