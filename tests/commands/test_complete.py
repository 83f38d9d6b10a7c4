"""Tests for the ``complete`` command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pwctl.cli import cli
from pwctl.commands.complete import bash_escape
from pwctl.infrastructure.store import FileStore
from tests.conftest import put_flat


@pytest.fixture
def populated(store_root: Path) -> Path:
    store = FileStore(store_root)
    put_flat(store, "web/github.com", "x")
    put_flat(store, "web/login.example.net", "x")
    put_flat(store, "mail/alice@example.net", "x")
    return store_root


class TestCompleteGenerate:
    def test_domains(self, cli_runner: CliRunner, populated: Path) -> None:
        result = cli_runner.invoke(cli, ["--store", str(populated), "complete", "generate", "ex"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["example.net"]

    def test_emails_by_basename(self, cli_runner: CliRunner, populated: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--store", str(populated), "complete", "generate", "work/al"]
        )
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["alice@example.net"]

    def test_json(self, cli_runner: CliRunner, populated: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--store", str(populated), "--json", "complete", "generate", "git"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["op"] == "complete"
        assert payload["data"]["items"] == ["github.com"]

    def test_missing_store_prints_nothing(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--store", str(tmp_path / "absent"), "complete", "generate", "ex"]
        )
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_no_needle_prints_nothing(self, cli_runner: CliRunner, populated: Path) -> None:
        result = cli_runner.invoke(cli, ["--store", str(populated), "complete", "generate"])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_no_needle_json(self, cli_runner: CliRunner, populated: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--store", str(populated), "--json", "complete", "generate"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["data"]["items"] == []
        assert payload["data"]["count"] == 0


class TestBashEscape:
    @pytest.mark.parametrize(
        "raw,escaped",
        [
            ("example.com", "example.com"),
            ("a@b.com", "a@b.com"),
            ("my site", "my\\ site"),
            ("it's", "it\\'s"),
            ("$(x)", "\\$\\(x\\)"),
        ],
    )
    def test_escape(self, raw: str, escaped: str) -> None:
        assert bash_escape(raw) == escaped
