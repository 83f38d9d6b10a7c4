"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``config.toml`` only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class CoreConfig(BaseModel):
    """[core] section."""

    model_config = {"frozen": True}

    autoclip: bool = False
    cliptimeout: int = 45


class GenerateConfig(BaseModel):
    """[generate] section.

    ``length`` of 0 means "not configured" (the hard default applies) and
    ``symbols`` of None means "not configured" (symbols stay off).
    """

    model_config = {"frozen": True}

    length: int = 0
    symbols: bool | None = None
    separator: str = " "
    lang: str = "en"
    external_timeout: float = 30.0


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    path: Path | None = None
    template_name: str = ".pwctl-template"


class RuleSpec(BaseModel):
    """One ``[rules."<domain>"]`` entry."""

    model_config = {"frozen": True}

    min_length: int
    max_length: int
    symbols: str | None = None
    change_url: str | None = None


class GitConfig(BaseModel):
    """[git] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    auto_push: bool = False
