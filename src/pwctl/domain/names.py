"""Secret name patterns and hierarchical path helpers.

Secret names are ``/``-separated paths such as ``work/github.com/alice``.
The final segment is the *basename*; parent segments are walked leaf-first
when looking up per-domain rules and change URLs.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterator

NUMBER_PATTERN: re.Pattern[str] = re.compile(r"[0-9]+")
DOMAIN_PATTERN: re.Pattern[str] = re.compile(
    r"([a-z0-9]+(-[a-z0-9]+)*\.)+[a-z]{2,}", re.IGNORECASE
)
_SEGMENT_PATTERN: re.Pattern[str] = re.compile(r"^[^\x00-\x1f/\\]+$")


def is_number(value: str) -> bool:
    """Return True when *value* consists only of ASCII digits."""
    return NUMBER_PATTERN.fullmatch(value) is not None


def is_domain(value: str) -> bool:
    """Return True when *value* is shaped like a hostname (``a.example.com``)."""
    return DOMAIN_PATTERN.fullmatch(value) is not None


def basename(name: str) -> str:
    """Final path segment of *name* (``"work/a.example.com"`` → ``"a.example.com"``)."""
    return posixpath.basename(name.rstrip("/"))


def iter_segments_leaf_first(name: str) -> Iterator[str]:
    """Yield each path segment of *name*, starting at the leaf.

    Examples:
        >>> list(iter_segments_leaf_first("web/github.com/alice"))
        ['alice', 'github.com', 'web']
    """
    current = name.strip("/")
    while current and current != ".":
        yield posixpath.basename(current)
        current = posixpath.dirname(current)


def iter_child_segments_leaf_first(name: str) -> Iterator[str]:
    """Like :func:`iter_segments_leaf_first` but never yields the root segment."""
    parts = [p for p in name.strip("/").split("/") if p]
    for i in range(len(parts) - 1, 0, -1):
        yield parts[i]


def validate_name(name: str) -> str:
    """Normalize and validate a secret name, raising ValueError on bad input.

    Rejects empty names, ``.``/``..`` segments, and control characters.
    """
    cleaned = name.strip().strip("/")
    if not cleaned:
        msg = "secret name must not be empty"
        raise ValueError(msg)
    for part in cleaned.split("/"):
        if part in ("", ".", "..") or not _SEGMENT_PATTERN.match(part):
            msg = f"invalid secret name: {name!r}"
            raise ValueError(msg)
    return cleaned
