"""Length/generator resolver — turns raw intent into a :class:`ResolvedPlan`.

Length precedence, highest first:

1. explicit numeric argument (clamped when a domain rule applies);
2. domain rule for the target name → prompt with a clamped default and
   re-clamp the answer;
3. ``PWCTL_PW_DEFAULT_LENGTH`` when valid, used without prompting;
4. ``[generate] length`` or the hard default, offered as a prompt suggestion.

Word-combination passwords count words instead of characters, default to 4
and do not consult the environment.
"""

from __future__ import annotations

import logging
import os
from typing import assert_never

from pwctl.config.models import GenerateConfig
from pwctl.domain.errors import UsageError
from pwctl.domain.names import is_number, iter_segments_leaf_first
from pwctl.domain.requests import (
    DEFAULT_LENGTH,
    DEFAULT_RULE_LENGTH,
    DEFAULT_XKCD_LENGTH,
    GenerationRequest,
    GeneratorKind,
    OperationContext,
    ResolvedPlan,
)
from pwctl.domain.rules import DomainRule, RuleBook
from pwctl.infrastructure.prompts import Prompter

LENGTH_ENV_VAR = "PWCTL_PW_DEFAULT_LENGTH"
LENGTH_QUESTION = "How long should the password be?"
WORDS_QUESTION = "How many words should be combined to a password?"

logger = logging.getLogger(__name__)


def find_rule(rules: RuleBook, name: str) -> tuple[str, DomainRule] | None:
    """Walk *name* leaf → root and return the first ``(segment, rule)`` match."""
    for segment in iter_segments_leaf_first(name):
        rule = rules.lookup_rule(segment)
        if rule is not None:
            return segment, rule
    return None


def parse_length(raw: str) -> int:
    """Parse a length argument made of ASCII digits only."""
    if not is_number(raw):
        msg = f"password length must be a number: {raw!r}"
        raise UsageError(msg, length=raw)
    return int(raw)


def check_length(length: int) -> int:
    if length < 1:
        msg = "password length must not be zero"
        raise UsageError(msg, length=length)
    return length


def default_length_from_env(env_value: str | None, configured: int = 0) -> tuple[int, bool]:
    """Return ``(length, is_custom)``.

    *is_custom* is True only when the environment supplies a valid length
    (numeric and >= 1); otherwise the configured or hard default is returned.
    """
    default = configured if configured > 0 else DEFAULT_LENGTH
    if env_value is None:
        return default, False
    if not is_number(env_value):
        return default, False
    length = int(env_value)
    if length < 1:
        return default, False
    return length, True


def resolve_symbols(requested: bool | None, configured: bool | None) -> bool:
    """Explicit flag, then persisted configuration, then False."""
    if requested is not None:
        return requested
    if configured is not None:
        return configured
    return False


class PlanResolver:
    """Resolve a :class:`GenerationRequest` using rules, env, config, and prompts."""

    def __init__(
        self,
        rules: RuleBook,
        prompter: Prompter,
        config: GenerateConfig | None = None,
        *,
        env_length: str | None = None,
    ) -> None:
        self._rules = rules
        self._prompter = prompter
        self._config = config or GenerateConfig()
        self._env_length = env_length

    @classmethod
    def from_environment(
        cls,
        rules: RuleBook,
        prompter: Prompter,
        config: GenerateConfig | None = None,
    ) -> PlanResolver:
        return cls(rules, prompter, config, env_length=os.environ.get(LENGTH_ENV_VAR))

    def resolve(self, request: GenerationRequest, context: OperationContext) -> ResolvedPlan:
        """Produce the plan, raising UsageError on invalid or zero lengths."""
        context.raise_if_cancelled()

        kind = request.generator_kind
        strict = request.strict or kind is GeneratorKind.STRICT
        if kind is GeneratorKind.STRICT:
            kind = GeneratorKind.DEFAULT

        symbols = resolve_symbols(request.symbols_requested, self._config.symbols)
        common = {
            "symbols": symbols,
            "strict": strict,
            "generator_kind": kind,
            "separator": (
                request.separator if request.separator is not None else self._config.separator
            ),
            "lang": request.lang or self._config.lang,
        }

        bypass_rules = request.force_overwrite or context.force or bool(request.field_key)
        rule_match = None if bypass_rules else find_rule(self._rules, request.target_name)
        if rule_match is not None:
            domain, rule = rule_match
            logger.info("Using password rules for %s", domain)
            length = self._rule_length(request.raw_length, rule, context)
            return ResolvedPlan(length=length, domain=domain, domain_rule=rule, **common)

        match kind:
            case GeneratorKind.XKCD:
                length = self._word_count(request.raw_length, context)
            case (
                GeneratorKind.DEFAULT
                | GeneratorKind.STRICT
                | GeneratorKind.MEMORABLE
                | GeneratorKind.EXTERNAL
            ):
                length = self._character_length(request.raw_length, context)
            case _:
                assert_never(kind)

        return ResolvedPlan(length=length, **common)

    # ------------------------------------------------------------------
    # Per-variant length resolution
    # ------------------------------------------------------------------

    def _rule_length(self, raw: str | None, rule: DomainRule, context: OperationContext) -> int:
        if raw is not None:
            return rule.clamp(parse_length(raw))

        context.raise_if_cancelled()
        question = f"{LENGTH_QUESTION} (min: {rule.min_length}, max: {rule.max_length})"
        answer = self._prompter.ask_int(question, rule.clamp(DEFAULT_RULE_LENGTH))
        return rule.clamp(answer)

    def _character_length(self, raw: str | None, context: OperationContext) -> int:
        if raw is not None:
            return check_length(parse_length(raw))

        candidate, is_custom = default_length_from_env(self._env_length, self._config.length)
        if is_custom:
            return candidate

        context.raise_if_cancelled()
        return check_length(self._prompter.ask_int(LENGTH_QUESTION, candidate))

    def _word_count(self, raw: str | None, context: OperationContext) -> int:
        if raw is not None:
            return check_length(parse_length(raw))

        context.raise_if_cancelled()
        return check_length(self._prompter.ask_int(WORDS_QUESTION, DEFAULT_XKCD_LENGTH))
