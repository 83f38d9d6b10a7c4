"""Tests for PluginManager — registration, hook relay, and rule collection."""

from __future__ import annotations

from typing import Any

import pluggy
import pytest

from pwctl.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("pwctl")


class _DummyPlugin:
    @hookimpl
    def post_generate(self, name: str, key: str | None, created: bool) -> None:
        pass


class _RulesPlugin:
    def __init__(self, specs: Any) -> None:
        self._specs = specs

    @hookimpl
    def register_domain_rules(self) -> Any:
        return self._specs


class _BrokenRulesPlugin:
    @hookimpl
    def register_domain_rules(self) -> dict[str, dict[str, Any]]:
        msg = "rules unavailable"
        raise RuntimeError(msg)


class _EntryPointClass:
    @hookimpl
    def register_domain_rules(self) -> dict[str, dict[str, Any]]:
        return {"class.example": {"min_length": 9}}


class TestRegistration:
    @pytest.mark.parametrize("hook_name", ["post_write", "post_generate", "register_domain_rules"])
    def test_hookspecs_registered(self, hook_name: str) -> None:
        assert hasattr(PluginManager().hook, hook_name)

    def test_register_named(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.list_plugin_names()

    def test_register_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_not_loaded_before_discover(self) -> None:
        assert PluginManager().is_loaded is False

    def test_discover_marks_loaded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        pm = PluginManager()
        monkeypatch.setattr(pm._pm, "load_setuptools_entrypoints", lambda group: 0)
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert pm.discover_and_load() == ["dummy"]
        assert pm.is_loaded is True

    def test_discover_instantiates_classes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        pm = PluginManager()

        def fake_load(group: str) -> int:
            pm._pm.register(_EntryPointClass, name="from-entry-point")
            return 1

        monkeypatch.setattr(pm._pm, "load_setuptools_entrypoints", fake_load)
        pm.discover_and_load()
        assert pm.collect_domain_rules() == {"class.example": {"min_length": 9}}


class TestCollectDomainRules:
    def test_empty(self) -> None:
        assert PluginManager().collect_domain_rules() == {}

    def test_later_plugin_wins(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_RulesPlugin({"a.com": {"min_length": 5}}), name="first")
        pm.register_plugin(
            _RulesPlugin({"a.com": {"min_length": 7}, "b.com": {"max_length": 9}}), name="second"
        )
        assert pm.collect_domain_rules() == {
            "a.com": {"min_length": 7},
            "b.com": {"max_length": 9},
        }

    def test_non_dict_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        pm = PluginManager()
        pm.register_plugin(_RulesPlugin(["bad"]), name="bad")
        pm.register_plugin(_RulesPlugin({"a.com": {"min_length": 5}}), name="good")
        with caplog.at_level("WARNING"):
            assert pm.collect_domain_rules() == {"a.com": {"min_length": 5}}
        assert "Ignoring non-dict domain rule registration" in caplog.text

    def test_failure_is_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        pm = PluginManager()
        pm.register_plugin(_BrokenRulesPlugin(), name="broken")
        with caplog.at_level("WARNING"):
            assert pm.collect_domain_rules() == {}
        assert "Failed to collect domain rules" in caplog.text
