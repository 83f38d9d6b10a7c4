"""Tests for BaseService event dispatch."""

from __future__ import annotations

import pluggy

from pwctl.infrastructure.store import FileStore
from pwctl.plugins.manager import PluginManager
from pwctl.services.base import BaseService

hookimpl = pluggy.HookimplMarker("pwctl")


class Exploding:
    @hookimpl
    def post_write(self, name: str, path: str, message: str) -> None:
        msg = "plugin crashed"
        raise RuntimeError(msg)


class TestDispatchEvent:
    def test_without_plugins_is_noop(self, store: FileStore) -> None:
        warnings: list[str] = []
        BaseService(store)._dispatch_event(
            "post_write", {"name": "a", "path": "p", "message": "m"}, warnings
        )
        assert warnings == []

    def test_plugin_failure_becomes_warning(self, store: FileStore) -> None:
        plugins = PluginManager()
        plugins.register_plugin(Exploding(), name="exploding")
        warnings: list[str] = []
        BaseService(store, plugins=plugins)._dispatch_event(
            "post_write", {"name": "a", "path": "p", "message": "m"}, warnings
        )
        assert warnings == ["Event dispatch failed for post_write"]
