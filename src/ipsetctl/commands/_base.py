"""Click command base class with --examples support.

``--help`` stays short; ``--examples`` prints sample invocations and exits.
"""

from __future__ import annotations

from typing import Any

import click


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value:
        return
    command = ctx.command
    assert isinstance(command, IpsCommand)
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(command.examples)
    ctx.exit(0)


class IpsCommand(click.Command):
    """Click Command that accepts an ``examples`` string."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_show_examples,
                    help="Show usage examples.",
                )
            )
