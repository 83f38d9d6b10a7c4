"""Generator dispatcher — maps a resolved plan onto one generation strategy.

Priority: a matched domain rule always wins; otherwise the plan's generator
kind selects the strategy. Generators are injected through
:class:`Generators` so tests can substitute deterministic word sources.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import assert_never

from pwctl.domain.errors import GenerationError
from pwctl.domain.requests import GeneratorKind, OperationContext, ResolvedPlan
from pwctl.domain.rules import DomainRule
from pwctl.generators.charset import (
    generate_for_domain,
    generate_password,
    generate_with_all_classes,
)
from pwctl.generators.external import generate_external
from pwctl.generators.memorable import generate_memorable
from pwctl.generators.xkcd import generate_words


@dataclass(frozen=True)
class Generators:
    """The opaque generation collaborators, one per strategy."""

    random: Callable[[int, bool], str] = generate_password
    all_classes: Callable[[int, bool], str] = generate_with_all_classes
    memorable: Callable[[int, bool, bool], str] = generate_memorable
    words: Callable[[int, str, str], str] = generate_words
    external: Callable[..., str] = generate_external
    for_domain: Callable[[int, DomainRule], str] = generate_for_domain


DEFAULT_GENERATORS = Generators()


def dispatch(
    plan: ResolvedPlan,
    *,
    name: str,
    context: OperationContext,
    generators: Generators = DEFAULT_GENERATORS,
) -> str:
    """Generate a password for *name* according to *plan*.

    Raises GenerationError when a generator fails or returns an empty string.
    """
    context.raise_if_cancelled()

    if plan.domain_rule is not None:
        subject = plan.domain or name
        password = generators.for_domain(plan.length, plan.domain_rule)
    else:
        subject = name
        kind = plan.generator_kind
        match kind:
            case GeneratorKind.XKCD:
                password = generators.words(plan.length, plan.separator, plan.lang)
            case GeneratorKind.MEMORABLE:
                password = generators.memorable(plan.length, plan.symbols, plan.strict)
            case GeneratorKind.EXTERNAL:
                password = generators.external(plan.length, timeout=context.external_timeout)
            case GeneratorKind.DEFAULT | GeneratorKind.STRICT:
                if plan.strict:
                    password = generators.all_classes(plan.length, plan.symbols)
                else:
                    password = generators.random(plan.length, plan.symbols)
            case _:
                assert_never(kind)

    if not password:
        msg = f"failed to generate password for {subject}"
        raise GenerationError(msg, name=name)
    return password
