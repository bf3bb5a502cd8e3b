"""serve: run the HTTP API with uvicorn."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dthread.commands._base import DtCommand

if TYPE_CHECKING:
    from dthread.commands._context import AppContext


@click.command(
    cls=DtCommand,
    examples="""\
  # Serve on the [api] host/port (default 127.0.0.1:3001)
  dthread serve

  # Listen on all interfaces
  dthread serve --host 0.0.0.0 --port 8080""",
)
@click.option("--host", default=None, help="Bind address (default: [api] host).")
@click.option("--port", default=None, type=int, help="Listen port (default: [api] port).")
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None) -> None:
    """Start the HTTP API server."""
    import uvicorn

    from dthread.api.app import create_app

    api = app.settings.api
    uvicorn.run(
        create_app(app.settings),
        host=host or api.host,
        port=port or api.port,
        log_config=None,
    )
