"""Pluggy hook specifications for pwctl.

Two lifecycle events fire after store mutations; one setup-time hook lets
plugins contribute domain password rules.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("pwctl")


class PwctlHookSpec:
    """Hook specifications for the pwctl plugin system."""

    @hookspec
    def post_write(self, name: str, path: str, message: str) -> None:
        """Called after a secret is written. *message* is the change annotation."""

    @hookspec
    def post_generate(self, name: str, key: str | None, created: bool) -> None:
        """Called after a generated password has been stored."""

    @hookspec
    def register_domain_rules(self) -> dict[str, dict[str, Any]] | None:
        """Return ``{domain: {min_length, max_length, ...}}`` rule specs."""
