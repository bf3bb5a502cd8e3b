"""AppContext: the object every dthread command receives via ``@click.pass_obj``.

It owns the settings for the invocation, opens the entity store on first
use, and turns a ServiceResult into output plus an exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dthread.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from dthread.config.settings import DThreadSettings
    from dthread.infrastructure.store import EntityStore
    from dthread.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by the root group and its commands.

    ``--help``, ``--version`` and ``--examples`` finish before :attr:`store`
    is touched, so they never create ``.dthread/dthread.db``.
    """

    def __init__(self, settings: DThreadSettings) -> None:
        self.settings = settings
        self._store: EntityStore | None = None

        from dthread.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from dthread.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    @property
    def store(self) -> EntityStore:
        if self._store is None:
            from dthread.infrastructure.store import EntityStore

            self._store = EntityStore(self.settings)
        return self._store

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result prints to stderr and exits 1.

        Outside ``--json`` mode warnings are echoed to stderr as
        ``WARNING: ...`` lines; in JSON mode they are part of the payload.
        """
        output = format_result(result, settings=self.output_settings)
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(1)

        click.echo(output)
        if not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def close(self) -> None:
        """Release the store's database connections, if it was opened."""
        if self._store is not None:
            self._store.close()
            self._store = None
