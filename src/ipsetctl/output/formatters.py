"""Human/JSON rendering of ServiceResult.

``--json`` dumps the full result model. Human mode prints a status line,
the IP set identifiers, and the address list as a table. ``--quiet``
reduces success output to the status line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from ipsetctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from ipsetctl.services.result import ServiceResult

_HIDDEN_KEYS = frozenset({"addresses"})


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _address_table(addresses: list[str]) -> Table:
    table = Table(show_header=True, header_style="ips.key", box=None, pad_edge=False)
    table.add_column("#", justify="right", style="ips.key")
    table.add_column("CIDR", style="ips.cidr")
    for i, cidr in enumerate(addresses, start=1):
        table.add_row(str(i), escape(cidr))
    return table


def _render_data(data: dict[str, Any], settings: OutputSettings) -> list[Any]:
    rows: list[Any] = []
    for key, value in data.items():
        if key in _HIDDEN_KEYS:
            continue
        if key == "lock_token" and not settings.verbose:
            continue
        rows.append(f"  [ips.key]{key}:[/ips.key] {escape(str(value))}")
    addresses = data.get("addresses")
    if addresses is not None:
        if addresses:
            rows.append(_address_table(list(addresses)))
        else:
            rows.append("  [ips.key](no addresses)[/ips.key]")
    return rows


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Render *result* according to *settings* (defaults to human output)."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=True)
    if result.ok:
        console.print(f"[ips.ok]OK[/ips.ok]: [ips.op]{result.op}[/ips.op]")
        if not settings.quiet:
            for row in _render_data(result.data, settings):
                console.print(row)
            if settings.verbose and result.meta:
                for key, value in result.meta.items():
                    console.print(f"  [ips.key]{key}:[/ips.key] {value}")
    else:
        code = result.error.code if result.error else "UNKNOWN"
        message = result.error.message if result.error else "Unknown error"
        console.print(
            f"[ips.error]ERROR[/ips.error]: [ips.op]{result.op}[/ips.op] "
            f"({code}) {escape(message)}"
        )
    return get_output(console).rstrip("\n")
