"""Plugin discovery and loading.

Discovery: entry points in the ``pwctl.plugins`` group via pluggy's
setuptools loader. Built-in plugins are registered directly.
INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

import pluggy

from pwctl.plugins.hookspecs import PwctlHookSpec

PROJECT_NAME = "pwctl"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PwctlHookSpec)
        self._loaded = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return the names of all registered plugins."""
        self._pm.load_setuptools_entrypoints("pwctl.plugins")
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect_domain_rules(self) -> dict[str, dict[str, Any]]:
        """Merge rule specs from every plugin; later plugins win on conflicts."""
        merged: dict[str, dict[str, Any]] = {}
        try:
            results = self._pm.hook.register_domain_rules()
        except Exception:
            logger.warning("Failed to collect domain rules from plugins", exc_info=True)
            return merged
        for specs in reversed(results):
            if not isinstance(specs, dict):
                logger.warning("Ignoring non-dict domain rule registration: %r", specs)
                continue
            merged.update(specs)
        return merged

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
