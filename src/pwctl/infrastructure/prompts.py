"""Terminal prompts behind a small contract so services stay testable.

Non-interactive mode never blocks: string and integer questions return the
suggested default and confirmations return the ``always_yes`` flag.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar

import click

from pwctl.domain.errors import AbortedError

_T = TypeVar("_T")


class Prompter(Protocol):
    def ask_string(self, prompt: str, default: str = "") -> str: ...

    def ask_int(self, prompt: str, default: int) -> int: ...

    def ask_confirmation(self, prompt: str) -> bool: ...


def _ask(func: Callable[[], _T]) -> _T:
    try:
        return func()
    except click.Abort as exc:
        msg = "user aborted"
        raise AbortedError(msg) from exc


class ClickPrompter:
    """Prompter backed by :func:`click.prompt` and :func:`click.confirm`."""

    def __init__(self, *, interactive: bool = True, always_yes: bool = False) -> None:
        self.interactive = interactive
        self.always_yes = always_yes

    def ask_string(self, prompt: str, default: str = "") -> str:
        if not self.interactive:
            return default
        return _ask(
            lambda: click.prompt(prompt, default=default, show_default=bool(default), err=True)
        )

    def ask_int(self, prompt: str, default: int) -> int:
        """Ask for an integer; click re-prompts until the input parses."""
        if not self.interactive:
            return default
        return _ask(lambda: click.prompt(prompt, default=default, type=int, err=True))

    def ask_confirmation(self, prompt: str) -> bool:
        if self.always_yes:
            return True
        if not self.interactive:
            return False
        return _ask(lambda: click.confirm(prompt, default=False, err=True))
