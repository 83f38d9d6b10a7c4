"""Tests for PwctlSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from pwctl.config.discovery import CONFIG_ENV_VAR
from pwctl.config.settings import PwctlSettings


def _write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "xdg-config" / "pwctl" / "config.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = PwctlSettings.from_cli()
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.core.autoclip is False
        assert settings.core.cliptimeout == 45
        assert settings.generate.length == 0
        assert settings.generate.symbols is None
        assert settings.rules == {}
        assert settings.git.enabled is True
        assert settings.store_root == tmp_path / "xdg-data" / "pwctl" / "store"

    def test_frozen(self) -> None:
        settings = PwctlSettings.from_cli()
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_discovered_config(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path, "[core]\nautoclip = true\n[generate]\nlength = 30\nsymbols = true\n"
        )
        settings = PwctlSettings.from_cli()
        assert settings.config_path == path
        assert settings.core.autoclip is True
        assert settings.core.cliptimeout == 45
        assert settings.generate.length == 30
        assert settings.generate.symbols is True

    def test_rules_section(self, tmp_path: Path) -> None:
        _write_config(
            tmp_path,
            '[rules."bank.example"]\nmin_length = 10\nmax_length = 12\nsymbols = "!?"\n',
        )
        rule = PwctlSettings.from_cli().rules["bank.example"]
        assert (rule.min_length, rule.max_length, rule.symbols) == (10, 12, "!?")
        assert rule.change_url is None

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.toml"
        custom.write_text('[store]\ntemplate_name = "tpl"\n', encoding="utf-8")
        settings = PwctlSettings.from_cli(config_path=str(custom))
        assert settings.config_path == custom
        assert settings.store.template_name == "tpl"

    def test_missing_explicit_path_means_no_config(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[core]\nautoclip = true\n")
        settings = PwctlSettings.from_cli(config_path=str(tmp_path / "absent.toml"))
        assert settings.config_path is None
        assert settings.core.autoclip is False

    def test_invalid_toml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[core\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            PwctlSettings.from_cli()


class TestPriority:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, "[core]\ncliptimeout = 10\n")
        monkeypatch.setenv("PWCTL_CORE__CLIPTIMEOUT", "20")
        assert PwctlSettings.from_cli().core.cliptimeout == 20

    def test_cli_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PWCTL_QUIET", "false")
        assert PwctlSettings.from_cli(quiet=True).quiet is True

    def test_config_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "elsewhere.toml"
        path.write_text("[git]\nauto_push = true\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert PwctlSettings.from_cli().git.auto_push is True


class TestStoreRoot:
    def test_override_wins(self, tmp_path: Path) -> None:
        _write_config(tmp_path, f'[store]\npath = "{tmp_path / "configured"}"\n')
        settings = PwctlSettings.from_cli(store_path=tmp_path / "flag")
        assert settings.store_root == tmp_path / "flag"

    def test_configured_path(self, tmp_path: Path) -> None:
        _write_config(tmp_path, f'[store]\npath = "{tmp_path / "configured"}"\n')
        assert PwctlSettings.from_cli().store_root == tmp_path / "configured"
