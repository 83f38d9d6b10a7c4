"""BaseService — foundation for pwctl services.

Every service receives a :class:`~pwctl.infrastructure.store.SecretStore`
at construction time, plus an optional plugin manager used to announce
lifecycle events.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pwctl.infrastructure.store import SecretStore
    from pwctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes operating on a secret store."""

    def __init__(self, store: SecretStore, *, plugins: PluginManager | None = None) -> None:
        self._store = store
        self._plugins = plugins

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Dispatch a lifecycle hook. No-op without a plugin manager.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        try:
            getattr(self._plugins.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
