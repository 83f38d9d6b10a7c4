"""Command group: shell completion helpers."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import click

from pwctl.commands._base import PwGroup
from pwctl.services.completion import CompletionService

if TYPE_CHECKING:
    from pwctl.commands._context import AppContext

_UNSAFE = re.compile(r"([^\w@%+=:,./-])", re.ASCII)


def bash_escape(value: str) -> str:
    """Backslash-escape characters bash would split or expand."""
    return _UNSAFE.sub(r"\\\1", value)


@click.group(
    cls=PwGroup,
    examples="""\
  pwctl complete generate exam
  pwctl complete generate work/bo""",
)
def complete() -> None:
    """Print completion candidates for shell integration."""


@complete.command(
    "generate",
    examples="""\
  pwctl complete generate exam      # domains from stored names
  pwctl complete generate work/bo   # account handles by basename""",
)
@click.argument("needle", default="")
@click.pass_obj
def complete_generate(app: AppContext, needle: str) -> None:
    """Suggest names for ``pwctl generate`` matching NEEDLE.

    Prints one bash-escaped candidate per line. Nothing is printed on error
    or when NEEDLE is empty.
    """
    result = CompletionService(app.store).suggest(needle)
    if app.settings.json_output:
        app.emit(result)
        return
    if not result.ok:
        return
    for item in result.data["items"]:
        click.echo(bash_escape(item))
