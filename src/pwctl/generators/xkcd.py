"""Word-combination ("correct horse battery staple") generator."""

from __future__ import annotations

import functools
import secrets
from importlib import resources

from pwctl.domain.errors import GenerationError


@functools.lru_cache(maxsize=8)
def load_wordlist(lang: str) -> tuple[str, ...]:
    """Load the packaged word list for *lang* (one lowercase word per line)."""
    resource = resources.files("pwctl.generators").joinpath("wordlists", f"{lang}.txt")
    try:
        raw = resource.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError) as exc:
        msg = f"no word list available for language {lang!r}"
        raise GenerationError(msg, lang=lang) from exc
    words = tuple(w.strip() for w in raw.splitlines() if w.strip())
    if not words:
        msg = f"word list for language {lang!r} is empty"
        raise GenerationError(msg, lang=lang)
    return words


def generate_words(count: int, separator: str, lang: str = "en") -> str:
    """Join *count* randomly chosen words with *separator*."""
    if count < 1:
        return ""
    words = load_wordlist(lang)
    return separator.join(secrets.choice(words) for _ in range(count))
