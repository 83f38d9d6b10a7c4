"""Hidden command: clear the clipboard after a timeout."""

from __future__ import annotations

import os

import click

from pwctl.commands._base import PwCommand
from pwctl.infrastructure.clipboard import UNCLIP_CHECKSUM_ENV, ClipboardError, clear_after


@click.command(cls=PwCommand, hidden=True)
@click.option("--timeout", type=int, default=45, show_default=True, help="Seconds to wait.")
def unclip(timeout: int) -> None:
    """Wait, then clear the clipboard if it still holds the copied password."""
    try:
        clear_after(timeout, os.environ.get(UNCLIP_CHECKSUM_ENV))
    except ClipboardError as exc:
        raise click.ClickException(exc.message) from exc
