"""Command: show the current addresses of an IP set."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ipsetctl.commands._base import IpsCommand

if TYPE_CHECKING:
    from ipsetctl.commands._context import AppContext


@click.command(
    cls=IpsCommand,
    examples="""\
  ipsetctl show 1a2b3c4d-5678-90ab-cdef-1234567890ab blocklist
  ipsetctl -v show 1a2b3c4d-5678-90ab-cdef-1234567890ab blocklist""",
)
@click.argument("ip_set_id")
@click.argument("ip_set_name")
@click.pass_obj
def show(app: AppContext, ip_set_id: str, ip_set_name: str) -> None:
    """List the CIDRs currently in an IP set."""
    app.emit(app.ipset_service().show(ip_set_id, ip_set_name))
