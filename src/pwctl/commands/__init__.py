"""Subcommand modules for pwctl.

Provides register_commands() which uses deferred imports to keep
``pwctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from pwctl.commands.complete import complete

    cli.add_command(complete)

    # --- Standalone commands ---
    from pwctl.commands.generate import generate
    from pwctl.commands.unclip import unclip

    cli.add_command(generate)
    cli.add_command(unclip)
