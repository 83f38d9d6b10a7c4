"""Config file discovery and loading.

Lookup order: ``PWCTL_CONFIG`` env var, then
``$XDG_CONFIG_HOME/pwctl/config.toml`` (``~/.config`` when unset).
The ``--config`` CLI flag bypasses discovery entirely.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "PWCTL_CONFIG"


def _xdg_dir(env_var: str, fallback: str) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value)
    return Path.home() / fallback


def default_config_dir() -> Path:
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / "pwctl"


def default_store_path() -> Path:
    """Store location used when ``[store] path`` is not configured."""
    return _xdg_dir("XDG_DATA_HOME", ".local/share") / "pwctl" / "store"


def find_config() -> Path | None:
    """Return the config file path, or None if not found.

    Checks PWCTL_CONFIG first; an env path that does not exist yields None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    candidate = default_config_dir() / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None
