"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PWCTL_*`` prefix (``__`` for nested sections)
  3. TOML file    — ``config.toml`` from ``--config`` or discovery
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from pwctl.config.discovery import default_store_path, find_config
from pwctl.config.models import CoreConfig, GenerateConfig, GitConfig, RuleSpec, StoreConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a discovered or explicit ``config.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PwctlSettings(BaseSettings):
    """Unified settings for the pwctl CLI, frozen after construction.

    Stored on the :class:`~pwctl.commands._context.AppContext` at the CLI
    root and read by every command.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PWCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    store_override: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False
    yes: bool = False

    # --- TOML sections ---
    core: CoreConfig = Field(default_factory=CoreConfig)
    generate: GenerateConfig = Field(default_factory=GenerateConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    rules: dict[str, RuleSpec] = Field(default_factory=dict)
    git: GitConfig = Field(default_factory=GitConfig)

    @property
    def store_root(self) -> Path:
        """Effective store directory: ``--store`` > ``[store] path`` > XDG default."""
        if self.store_override is not None:
            return self.store_override.expanduser()
        if self.store.path is not None:
            return self.store.path.expanduser()
        return default_store_path()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        store_path: str | Path | None = None,
        **cli_flags: Any,
    ) -> PwctlSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given (a missing file means "no config"),
        otherwise discovers ``config.toml``. CLI flags are highest priority.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config()

        init: dict[str, Any] = {"config_path": toml_path, **cli_flags}
        if store_path is not None:
            init["store_override"] = Path(store_path)

        _tls.toml_path = toml_path
        try:
            return cls(**init)
        finally:
            _tls.toml_path = None
