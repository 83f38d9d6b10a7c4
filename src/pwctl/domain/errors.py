"""Error taxonomy for password generation and store reconciliation.

Internal layers raise :class:`PwctlError` subclasses. Services catch them
and translate ``code`` into a :class:`~pwctl.services.result.ServiceError`;
the CLI maps the same code onto a process exit status.
"""

from __future__ import annotations

from typing import Any

USAGE = "USAGE"
ABORTED = "ABORTED"
NO_NAME = "NO_NAME"
ENCRYPT = "ENCRYPT"
GENERATION = "GENERATION"
IO = "IO"
UNKNOWN = "UNKNOWN"

EXIT_CODES: dict[str, int] = {
    UNKNOWN: 1,
    USAGE: 2,
    ABORTED: 3,
    NO_NAME: 4,
    ENCRYPT: 5,
    GENERATION: 6,
    IO: 7,
}


def exit_code_for(code: str | None) -> int:
    """Return the process exit status for an error *code* (1 when unknown)."""
    if code is None:
        return 1
    return EXIT_CODES.get(code, 1)


class PwctlError(Exception):
    """Base error carrying a taxonomy code and optional structured detail."""

    code: str = UNKNOWN

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class UsageError(PwctlError):
    """Invalid or missing numeric input (length, word count)."""

    code = USAGE


class AbortedError(PwctlError):
    """The user declined to continue, or the operation was cancelled."""

    code = ABORTED


class NoNameError(PwctlError):
    """No secret name was supplied or entered."""

    code = NO_NAME


class GenerationError(PwctlError):
    """A generator failed or produced an empty password."""

    code = GENERATION


class StoreError(PwctlError):
    """A store read or write failed."""

    code = ENCRYPT


class SecretNotFoundError(StoreError):
    """The requested secret does not exist in the store."""


class SecretFieldError(PwctlError):
    """A field could not be set on a secret record."""

    code = USAGE


class SecretParseError(PwctlError):
    """Secret content could not be parsed into a record."""

    code = ENCRYPT


class TemplateRenderError(PwctlError):
    """A secret template could not be read or rendered."""

    code = UNKNOWN
