"""Name-suggestion heuristic for shell completion of ``pwctl generate``.

Two modes, chosen by the needle:

- **email** (needle contains ``/``): basenames containing ``@`` or ``_``,
  matched against the needle's basename.
- **domain** (otherwise): basenames shaped like hostnames plus each of their
  parent domains, matched against the raw needle.

Output is deduplicated, sorted, and prefix-filtered, so repeated calls on
the same listing return identical sequences.
"""

from __future__ import annotations

from collections.abc import Iterable

from pwctl.domain.names import basename, is_domain


def extract_emails(names: Iterable[str]) -> list[str]:
    """Basenames that look like account handles (contain ``@`` or ``_``)."""
    results: list[str] = []
    for name in names:
        base = basename(name)
        if "@" in base or "_" in base:
            results.append(base)
    return results


def extract_domains(names: Iterable[str]) -> list[str]:
    """Hostname-shaped basenames, expanded with their parent domains.

    Examples:
        >>> extract_domains(["web/login.example.com", "notes"])
        ['login.example.com', 'example.com']
    """
    results: list[str] = []
    for name in names:
        base = basename(name)
        if not is_domain(base):
            continue
        results.append(base)
        labels = base.split(".")
        for i in range(1, len(labels) - 1):
            parent = ".".join(labels[i:])
            if is_domain(parent):
                results.append(parent)
    return results


def uniq(values: Iterable[str]) -> list[str]:
    """Deduplicate and sort lexicographically."""
    return sorted(set(values))


def filter_prefix(values: Iterable[str], prefix: str) -> list[str]:
    return [v for v in values if v.startswith(prefix)]


def suggest(names: Iterable[str], needle: str) -> list[str]:
    """Return completion candidates for *needle* from the stored *names*."""
    if "/" in needle:
        return filter_prefix(uniq(extract_emails(names)), basename(needle))
    return filter_prefix(uniq(extract_domains(names)), needle)
