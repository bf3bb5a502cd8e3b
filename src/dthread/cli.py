"""Root CLI group for dthread: global flags, settings, and command registration."""

from __future__ import annotations

import click

from dthread import __version__
from dthread.commands import register_commands
from dthread.commands._context import AppContext
from dthread.config.logging import bind_command
from dthread.config.settings import DThreadSettings


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="dthread")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print ids only.")
@click.option("-v", "--verbose", is_flag=True, help="Show details and timing spans.")
@click.option("--log-json", is_flag=True, help="Write log lines to stderr as JSON.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Use this dthread.toml instead of discovering one.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """dthread: navigate a digital thread of engineering domains.

    Items live in ordered domains (Mission, Scenario, Requirements, ...);
    links run from one domain to the next and the layout draws each
    domain as a column.
    """
    settings = DThreadSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    bind_command(ctx.invoked_subcommand or "dthread")
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
