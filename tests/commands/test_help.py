"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from pwctl.cli import cli

HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--help"], ["generate", "complete", "--json", "--store", "--no-interact"]),
    (
        ["generate", "--help"],
        ["--clip", "--print", "--force", "--edit", "--symbols", "--strict", "--sep", "--lang"],
    ),
    (["generate", "--help"], ["--generator", "xkcd", "memorable", "external"]),
    (["complete", "--help"], ["generate"]),
    (["complete", "generate", "--help"], ["NEEDLE"]),
    (["unclip", "--help"], ["--timeout"]),
]


@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=[f"{'_'.join(args)}_{i}" for i, (args, _) in enumerate(HELP_COMMANDS)],
)
def test_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"


def test_unclip_hidden(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert "unclip" not in result.output
