"""Click command and group classes carrying on-demand usage examples.

``--help`` stays short; ``--examples`` prints the command's example
invocations and exits before any argument is parsed.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class _ExamplesMixin:
    """Registers an eager ``--examples`` option on the host command."""

    params: list[click.Parameter]
    examples: str | None

    def _install_examples(self, examples: str | None) -> None:
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples is None:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._print_examples,
                help="Show usage examples and exit.",
            )
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(self.examples or "", "  "))
        ctx.exit(0)


class DtCommand(_ExamplesMixin, click.Command):
    """A command accepting ``examples=`` alongside the usual Click kwargs."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class DtGroup(_ExamplesMixin, click.Group):
    """A group whose subcommands are :class:`DtCommand` by default."""

    command_class = DtCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)
