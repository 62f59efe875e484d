"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Builds the store client lazily so ``--help`` and
``--version`` never touch AWS, and centralizes result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ipsetctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from ipsetctl.config.settings import IpsSettings
    from ipsetctl.infrastructure.store import IPSetStore
    from ipsetctl.services.ipset import IPSetService
    from ipsetctl.services.result import ServiceResult


def build_store(settings: IpsSettings) -> IPSetStore:
    """Create the WAFv2 store client described by ``[store]``."""
    from ipsetctl.infrastructure.wafv2 import WAFv2IPSetStore

    return WAFv2IPSetStore(
        region=settings.store.region,
        endpoint_url=settings.store.endpoint_url,
    )


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: IpsSettings) -> None:
        self.settings = settings
        self._store: IPSetStore | None = None

        from ipsetctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def store(self) -> IPSetStore:
        """The store client (created on first access)."""
        if self._store is None:
            self._store = build_store(self.settings)
        return self._store

    def ipset_service(self) -> IPSetService:
        """An IPSetService wired to the configured scope, retry budget, and policy."""
        from ipsetctl.services.ipset import IPSetService
        from ipsetctl.services.retry import OptimisticRetry, RetryPolicy

        retry = self.settings.retry
        policy = RetryPolicy(
            max_retries=retry.max_retries,
            min_backoff_ms=retry.min_backoff_ms,
            max_backoff_ms=retry.max_backoff_ms,
        )
        return IPSetService(
            self.store,
            scope=self.settings.store.scope,
            retry=OptimisticRetry(policy),
            skip_unchanged_write=self.settings.mutation.skip_unchanged_write,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout. Warnings go to stderr unless in JSON mode,
          where they are part of the payload.
        * Failure: stderr, then exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
