"""Tests for format_result output modes."""

import json

from pwctl.output.formatters import OutputSettings, format_result
from pwctl.services.result import ServiceError, ServiceResult

GENERATED = ServiceResult(
    ok=True,
    op="generate",
    data={
        "name": "web/site",
        "messages": ['Password for entry "web/site" generated'],
        "password": "s3cret",
    },
)


class TestFormatResult:
    def test_default_is_rich(self) -> None:
        output = format_result(GENERATED)
        assert 'Password for entry "web/site" generated' in output
        assert "s3cret" in output

    def test_json(self) -> None:
        output = format_result(GENERATED, settings=OutputSettings(json_output=True))
        parsed = json.loads(output)
        assert parsed["op"] == "generate"
        assert parsed["data"]["password"] == "s3cret"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(GENERATED, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["ok"] is True

    def test_quiet(self) -> None:
        assert format_result(GENERATED, settings=OutputSettings(quiet=True)) == "s3cret"

    def test_quiet_error(self) -> None:
        failed = ServiceResult(
            ok=False, op="generate", error=ServiceError(code="USAGE", message="bad length")
        )
        output = format_result(failed, settings=OutputSettings(quiet=True))
        assert output == "ERROR: generate — bad length"
