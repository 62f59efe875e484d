"""Rich Console factory and theme for ipsetctl output.

Consoles render into a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` function. Rich drops color codes on its own
when the console is not a TTY (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

IPS_THEME = Theme(
    {
        "ips.ok": "bold green",
        "ips.error": "bold red",
        "ips.warning": "bold yellow",
        "ips.op": "bold cyan",
        "ips.key": "dim",
        "ips.cidr": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=IPS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
