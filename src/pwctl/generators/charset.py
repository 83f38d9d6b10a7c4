"""Character-sampling generators: lenient, all-classes strict, and rule-constrained."""

from __future__ import annotations

import secrets
import string

from pwctl.domain.errors import GenerationError
from pwctl.domain.rules import DomainRule

LOWER = string.ascii_lowercase
UPPER = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "~!@#$%^&*()_+-={}|[]\\:\"<>?,./"

_sysrand = secrets.SystemRandom()


def character_pools(symbols: bool, symbol_set: str = SYMBOLS) -> list[str]:
    pools = [LOWER, UPPER, DIGITS]
    if symbols and symbol_set:
        pools.append(symbol_set)
    return pools


def generate_password(length: int, symbols: bool) -> str:
    """Uniformly sample *length* characters from letters, digits, and optionally symbols."""
    if length < 1:
        return ""
    alphabet = "".join(character_pools(symbols))
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_with_all_classes(length: int, symbols: bool, symbol_set: str = SYMBOLS) -> str:
    """Sample a password guaranteed to contain every enabled character class.

    Raises GenerationError when *length* is shorter than the number of classes.
    """
    pools = character_pools(symbols, symbol_set)
    if length < len(pools):
        msg = f"length {length} is too short to include all {len(pools)} character classes"
        raise GenerationError(msg, length=length)

    chars = [secrets.choice(pool) for pool in pools]
    alphabet = "".join(pools)
    chars.extend(secrets.choice(alphabet) for _ in range(length - len(chars)))
    _sysrand.shuffle(chars)
    return "".join(chars)


def generate_for_domain(length: int, rule: DomainRule) -> str:
    """Strict password honouring a domain's symbol restrictions.

    ``rule.symbols`` of ``None`` allows the default symbol set; an empty
    string disallows symbols entirely.
    """
    symbol_set = SYMBOLS if rule.symbols is None else rule.symbols
    return generate_with_all_classes(length, bool(symbol_set), symbol_set)
