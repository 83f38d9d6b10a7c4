"""Open the user's editor on secret content."""

from __future__ import annotations

import click

from pwctl.domain.errors import UNKNOWN, PwctlError


class EditorError(PwctlError):
    """The editor could not be launched or exited abnormally."""

    code = UNKNOWN


def edit_text(content: str) -> str | None:
    """Return the edited text, or None when the user saved no changes."""
    try:
        return click.edit(content, extension=".secret", require_save=True)
    except click.ClickException as exc:
        raise EditorError(exc.format_message()) from exc
