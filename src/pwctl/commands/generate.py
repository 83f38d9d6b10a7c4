"""Standalone command: generate a password and store it."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from pwctl.commands._base import PwCommand
from pwctl.domain.requests import GenerationRequest, GeneratorKind, key_and_length, split_arguments
from pwctl.services.generate import GenerateService

if TYPE_CHECKING:
    from pwctl.commands._context import AppContext

_GENERATE_EXAMPLES = """\
  pwctl generate web/github.com 32
  pwctl generate --symbols --strict bank/example.com
  pwctl generate web/github.com api-token 40
  pwctl generate -g xkcd --sep - --lang de home/wifi 5
  pwctl generate web/shop username=alice url=https://shop.example
  pwctl generate --force --print web/paypal.com 12"""


@click.command(cls=PwCommand, examples=_GENERATE_EXAMPLES)
@click.argument("args", nargs=-1)
@click.option("-c", "--clip", is_flag=True, help="Copy the password to the clipboard.")
@click.option("-p", "--print", "print_password", is_flag=True, help="Print the password.")
@click.option("-f", "--force", is_flag=True, help="Overwrite without asking; ignore domain rules.")
@click.option("-e", "--edit", is_flag=True, help="Open an editor after generating.")
@click.option(
    "--symbols/--no-symbols",
    "-s/-S",
    default=None,
    help="Include symbols (defaults to [generate] symbols).",
)
@click.option(
    "-g",
    "--generator",
    type=click.Choice([kind.value for kind in GeneratorKind]),
    default=GeneratorKind.DEFAULT.value,
    show_default=True,
    help="Generation strategy.",
)
@click.option("--strict", is_flag=True, help="Require every character class.")
@click.option("--sep", "separator", default=None, help="Word separator for xkcd passwords.")
@click.option("--lang", default=None, help="Word list language for xkcd passwords.")
@click.pass_obj
def generate(
    app: AppContext,
    args: tuple[str, ...],
    clip: bool,
    print_password: bool,
    force: bool,
    edit: bool,
    symbols: bool | None,
    generator: str,
    strict: bool,
    separator: str | None,
    lang: str | None,
) -> None:
    """Generate a password for NAME, optionally for one KEY of the entry.

    Usage: NAME [KEY] [LENGTH] [FIELD=VALUE ...]. A lone numeric argument
    after NAME is the length.
    """
    positional, metadata = split_arguments(args)
    name = positional[0] if positional else ""
    key, length = key_and_length(positional)

    request = GenerationRequest(
        target_name=name,
        field_key=key,
        raw_length=length,
        generator_kind=GeneratorKind(generator),
        symbols_requested=symbols,
        strict=strict,
        force_overwrite=force,
        separator=separator,
        lang=lang,
        metadata=metadata,
    )

    svc = GenerateService(
        app.store,
        app.rules,
        app.prompter(),
        generate_config=app.settings.generate,
        core_config=app.settings.core,
        templates=app.templates,
        plugins=app.plugins,
    )
    result = svc.generate(
        request,
        app.operation_context(force=force),
        clip=clip,
        print_password=print_password,
        edit=edit,
        terminal=sys.stdout.isatty(),
    )
    app.emit(result)
