"""Click base classes for pwctl commands carrying an ``--examples`` flag.

``pwctl generate`` and the ``pwctl complete`` group declare their usage
samples inline through an ``examples=`` keyword. The text is only shown on
request, so ``--help`` stays short while ``pwctl generate --examples`` lists
the length, rule and generator combinations worth knowing.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click

EXAMPLES_FLAG = "--examples"


def _normalize(examples: str) -> str:
    """Re-indent example lines by two spaces regardless of how they were declared."""
    return textwrap.indent(textwrap.dedent(examples).strip("\n"), "  ")


def _examples_callback(examples: str):
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return show


class ExamplesMixin:
    """Store the ``examples`` text and register the eager flag that prints it.

    The flag is eager so ``pwctl generate web/site --examples`` exits before
    the store is touched or a password is generated.
    """

    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = _normalize(examples) if examples else None
        if self.examples is None:
            return
        self.params.append(  # type: ignore[attr-defined]
            click.Option(
                [EXAMPLES_FLAG],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_examples_callback(self.examples),
                help="Show usage examples and exit.",
            )
        )


class PwCommand(ExamplesMixin, click.Command):
    """A pwctl leaf command such as ``generate`` or ``complete generate``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class PwGroup(ExamplesMixin, click.Group):
    """A pwctl command group; subcommands are created as :class:`PwCommand`."""

    command_class = PwCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
