"""Syllable-based generator producing pronounceable passwords."""

from __future__ import annotations

import secrets

from pwctl.generators.charset import DIGITS, SYMBOLS

CONSONANTS = "bcdfghjklmnprstvwz"
VOWELS = "aeiou"


def _syllable() -> str:
    return secrets.choice(CONSONANTS) + secrets.choice(VOWELS)


def generate_memorable(length: int, symbols: bool, strict: bool) -> str:
    """Build a password of exactly *length* characters from consonant-vowel pairs.

    Lenient mode capitalises the first syllable and appends one digit (and a
    symbol when requested) if room allows. Strict mode always reserves room
    for an uppercase letter, a digit, and (when requested) a symbol, so every
    class is present for any length that fits them.
    """
    if length < 1:
        return ""

    tail = secrets.choice(DIGITS)
    if symbols:
        tail += secrets.choice(SYMBOLS)
    if not strict and len(tail) >= length:
        tail = ""

    body_len = length - len(tail)
    body = ""
    while len(body) < body_len:
        body += _syllable()
    body = body[:body_len]

    if body:
        body = body[0].upper() + body[1:]
    elif strict:
        return (secrets.choice(CONSONANTS).upper() + tail)[:length]
    return body + tail
