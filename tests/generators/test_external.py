"""Tests for the external generator bridge."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from pwctl.domain.errors import GenerationError
from pwctl.generators.external import EXTERNAL_ENV_VAR, generate_external


def _completed(stdout: str) -> MagicMock:
    return MagicMock(stdout=stdout, returncode=0)


class TestGenerateExternal:
    def test_first_line_and_length_argument(self) -> None:
        with patch("pwctl.generators.external.subprocess.run") as run:
            run.return_value = _completed("hunter2\nignored\n")
            assert generate_external(12, command="pwgen -s") == "hunter2"
        assert run.call_args.args[0] == ["pwgen", "-s", "12"]

    def test_reads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(EXTERNAL_ENV_VAR, "mygen")
        with patch("pwctl.generators.external.subprocess.run") as run:
            run.return_value = _completed("abc\n")
            assert generate_external(8) == "abc"
        assert run.call_args.args[0] == ["mygen", "8"]

    def test_not_configured(self) -> None:
        with pytest.raises(GenerationError, match="no external generator"):
            generate_external(8)

    def test_timeout(self) -> None:
        with patch(
            "pwctl.generators.external.subprocess.run",
            side_effect=subprocess.TimeoutExpired("gen", 1),
        ):
            with pytest.raises(GenerationError, match="timed out"):
                generate_external(8, timeout=1, command="gen")

    def test_failure(self) -> None:
        with patch(
            "pwctl.generators.external.subprocess.run",
            side_effect=subprocess.CalledProcessError(1, "gen"),
        ):
            with pytest.raises(GenerationError, match="failed"):
                generate_external(8, command="gen")

    def test_empty_output(self) -> None:
        with patch("pwctl.generators.external.subprocess.run") as run:
            run.return_value = _completed("")
            assert generate_external(8, command="gen") == ""
