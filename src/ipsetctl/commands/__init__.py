"""Subcommand modules for ipsetctl.

register_commands() defers imports so ``ipsetctl --help`` never loads
boto3.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from ipsetctl.commands.append import append
    from ipsetctl.commands.remove import remove
    from ipsetctl.commands.show import show

    cli.add_command(append)
    cli.add_command(remove)
    cli.add_command(show)
