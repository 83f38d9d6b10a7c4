"""Shared pytest fixtures and test helpers for pwctl tests."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner

from pwctl.config.settings import PwctlSettings
from pwctl.domain.rules import RuleBook
from pwctl.domain.secrets import FlatSecret
from pwctl.infrastructure.store import FileStore
from pwctl.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip ``PWCTL_*`` variables and point XDG dirs into the temp directory."""
    for var in list(os.environ):
        if var.startswith("PWCTL_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))


@pytest.fixture(autouse=True)
def _reset_telemetry() -> None:
    yield
    disable_telemetry()


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    root = tmp_path / "store"
    root.mkdir()
    return root


@pytest.fixture
def store(store_root: Path) -> FileStore:
    return FileStore(store_root)


@pytest.fixture
def rules() -> RuleBook:
    return RuleBook.builtin()


@pytest.fixture
def settings(store_root: Path) -> PwctlSettings:
    return PwctlSettings.from_cli(store_path=store_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Prompter replaying canned answers and recording every question asked.

    ``None`` in a script means "accept the suggested default".
    """

    def __init__(
        self,
        *,
        strings: Iterable[str | None] = (),
        ints: Iterable[int | None] = (),
        confirmations: Iterable[bool] = (),
    ) -> None:
        self.strings = list(strings)
        self.ints = list(ints)
        self.confirmations = list(confirmations)
        self.asked: list[tuple[str, object]] = []

    def ask_string(self, prompt: str, default: str = "") -> str:
        self.asked.append((prompt, default))
        answer = self.strings.pop(0) if self.strings else None
        return default if answer is None else answer

    def ask_int(self, prompt: str, default: int) -> int:
        self.asked.append((prompt, default))
        answer = self.ints.pop(0) if self.ints else None
        return default if answer is None else answer

    def ask_confirmation(self, prompt: str) -> bool:
        self.asked.append((prompt, None))
        return self.confirmations.pop(0) if self.confirmations else False


def put_secret(store: FileStore, name: str, content: str) -> Path:
    """Write raw *content* for *name* directly, bypassing record parsing."""
    path = store.path_for(name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def put_flat(store: FileStore, name: str, password: str, **fields: str) -> Path:
    """Store a flat secret with *fields* through the store contract."""
    return store.set(name, FlatSecret(password, fields), "seed")
