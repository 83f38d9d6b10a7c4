"""Per-domain password rules and change-password URLs.

A :class:`DomainRule` bounds the acceptable password length for a site and
optionally restricts the symbol alphabet. Rules are keyed by a single path
segment (normally a hostname) and are looked up leaf-first by the resolver.

The built-in tables are small; ``[rules]`` in the config file and plugins
implementing ``register_domain_rules`` extend or override them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, model_validator


class DomainRule(BaseModel):
    """Length bounds (and optional symbol alphabet) for one domain."""

    model_config = {"frozen": True}

    domain: str
    min_length: int
    max_length: int
    symbols: str | None = None
    change_url: str | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> DomainRule:
        if self.min_length < 1:
            msg = f"min_length must be >= 1 for {self.domain}"
            raise ValueError(msg)
        if self.max_length < self.min_length:
            msg = f"max_length must be >= min_length for {self.domain}"
            raise ValueError(msg)
        return self

    def clamp(self, value: int) -> int:
        """Clamp *value* into ``[min_length, max_length]``."""
        return max(self.min_length, min(self.max_length, value))


BUILTIN_RULES: dict[str, dict[str, Any]] = {
    "163.com": {"min_length": 6, "max_length": 16},
    "bankofamerica.com": {"min_length": 8, "max_length": 20, "symbols": "!@#$%^&*"},
    "paypal.com": {"min_length": 8, "max_length": 20},
    "wsj.com": {"min_length": 5, "max_length": 15},
    "battle.net": {"min_length": 8, "max_length": 16},
    "ea.com": {"min_length": 8, "max_length": 16},
}

BUILTIN_CHANGE_URLS: dict[str, str] = {
    "github.com": "https://github.com/settings/security",
    "google.com": "https://myaccount.google.com/signinoptions/password",
    "gitlab.com": "https://gitlab.com/-/user_settings/password/edit",
    "paypal.com": "https://www.paypal.com/myaccount/security/password/change",
}


class RuleBook:
    """Case-insensitive lookup table for domain rules and change URLs."""

    def __init__(
        self,
        rules: Iterable[DomainRule] = (),
        change_urls: Mapping[str, str] | None = None,
    ) -> None:
        self._rules: dict[str, DomainRule] = {}
        self._change_urls: dict[str, str] = {}
        for domain, url in (change_urls or {}).items():
            self._change_urls[domain.lower()] = url
        for rule in rules:
            self.add(rule)

    @classmethod
    def builtin(cls) -> RuleBook:
        """Return a rule book populated with the packaged tables."""
        return cls(
            (DomainRule(domain=d, **spec) for d, spec in BUILTIN_RULES.items()),
            BUILTIN_CHANGE_URLS,
        )

    def add(self, rule: DomainRule) -> None:
        """Register *rule*, replacing any existing rule for the same domain."""
        key = rule.domain.lower()
        self._rules[key] = rule
        if rule.change_url:
            self._change_urls[key] = rule.change_url

    def update(self, specs: Mapping[str, Mapping[str, Any]]) -> None:
        """Merge ``{domain: {min_length, max_length, ...}}`` specs over the book."""
        for domain, spec in specs.items():
            self.add(DomainRule(domain=domain, **dict(spec)))

    def lookup_rule(self, segment: str) -> DomainRule | None:
        return self._rules.get(segment.lower())

    def lookup_change_url(self, segment: str) -> str:
        return self._change_urls.get(segment.lower(), "")

    def __len__(self) -> int:
        return len(self._rules)
