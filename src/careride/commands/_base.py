"""``--examples`` support for careride commands and groups.

Declaring a command with ``examples="..."`` adds an eager ``--examples``
flag that prints the text and exits before arguments are validated, so
``careride messages send --examples`` works without its arguments.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(getattr(ctx.command, "examples", "") or "")
    ctx.exit(0)


_EXAMPLES_OPTION = click.Option(
    ["--examples"],
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_print_examples,
    help="Show usage examples and exit.",
)


class _ExamplesMixin:
    examples: str | None = None

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params: list[click.Parameter] = super().get_params(ctx)  # type: ignore[misc]
        return [*params, _EXAMPLES_OPTION] if self.examples else params


class CareCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples


class CareGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands are CareCommands (``examples=`` on ``@group.command``)."""

    command_class = CareCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
