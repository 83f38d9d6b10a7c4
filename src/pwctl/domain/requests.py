"""Generation request, resolved plan, and the per-invocation operation context."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, Field

from pwctl.domain.errors import AbortedError
from pwctl.domain.names import is_number
from pwctl.domain.rules import DomainRule

DEFAULT_LENGTH = 24
DEFAULT_XKCD_LENGTH = 4
DEFAULT_RULE_LENGTH = 16
DEFAULT_SEPARATOR = " "


class GeneratorKind(StrEnum):
    """Closed set of generation strategies selectable by ``--generator``."""

    DEFAULT = "default"
    STRICT = "strict"
    MEMORABLE = "memorable"
    XKCD = "xkcd"
    EXTERNAL = "external"


class GenerationRequest(BaseModel):
    """Raw user intent for a single ``generate`` invocation."""

    model_config = {"frozen": True}

    target_name: str
    field_key: str | None = None
    raw_length: str | None = None
    generator_kind: GeneratorKind = GeneratorKind.DEFAULT
    symbols_requested: bool | None = None
    strict: bool = False
    force_overwrite: bool = False
    separator: str | None = None
    lang: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class ResolvedPlan(BaseModel):
    """Fully resolved generation parameters.

    INVARIANT: when ``domain_rule`` is set, ``length`` lies within its bounds.
    """

    model_config = {"frozen": True}

    length: int = Field(gt=0)
    symbols: bool = False
    strict: bool = False
    generator_kind: GeneratorKind = GeneratorKind.DEFAULT
    domain: str | None = None
    domain_rule: DomainRule | None = None
    separator: str = DEFAULT_SEPARATOR
    lang: str = "en"


@dataclass(frozen=True)
class OperationContext:
    """Immutable flags and cancellation signal threaded through one invocation.

    Attributes:
        force: Skip overwrite confirmation and bypass domain rules.
        interactive: Whether prompts may block on terminal input.
        always_yes: Auto-answer confirmations with yes.
        external_timeout: Seconds to wait for an external generator.
        cancel: Set from outside to abort at the next suspension point.
    """

    force: bool = False
    interactive: bool = True
    always_yes: bool = False
    external_timeout: float = 30.0
    cancel: threading.Event = field(default_factory=threading.Event, compare=False)

    def raise_if_cancelled(self) -> None:
        if self.cancel.is_set():
            msg = "operation cancelled"
            raise AbortedError(msg)


def split_arguments(args: Sequence[str]) -> tuple[list[str], dict[str, str]]:
    """Split raw CLI tokens into positional arguments and ``key=value`` metadata.

    Later duplicate keys overwrite earlier ones.
    """
    positional: list[str] = []
    metadata: dict[str, str] = {}
    for token in args:
        key, sep, value = token.partition("=")
        if sep and key and positional:
            metadata[key] = value
        else:
            positional.append(token)
    return positional, metadata


def key_and_length(positional: Sequence[str]) -> tuple[str | None, str | None]:
    """Interpret the tokens after the secret name as ``[key] [length]``.

    With a single token it is the length when purely numeric, otherwise the
    field key.

    Examples:
        >>> key_and_length(["web/site", "32"])
        (None, '32')
        >>> key_and_length(["web/site", "pin", "6"])
        ('pin', '6')
        >>> key_and_length(["web/site", "api-token"])
        ('api-token', None)
    """
    key = positional[1] if len(positional) > 1 else None
    length = positional[2] if len(positional) > 2 else None
    if length is None and key is not None and is_number(key):
        return None, key
    return key or None, length or None
