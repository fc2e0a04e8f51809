"""Tests for the format_result dispatcher and OutputSettings."""

import json

from proftree.output.formatters import OutputSettings, format_result
from proftree.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="ERR", message=msg),
    )


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResult:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok("add_node", id="n1"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["id"] == "n1"

    def test_json_wins_over_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        assert json.loads(format_result(_ok(), settings=settings))["op"] == "test"

    def test_quiet_prints_id(self) -> None:
        output = format_result(_ok("add_node", id="n1"), settings=OutputSettings(quiet=True))
        assert output == "n1"

    def test_quiet_error(self) -> None:
        output = format_result(_err("stats", "boom"), settings=OutputSettings(quiet=True))
        assert output.startswith("ERROR: stats")
        assert "boom" in output

    def test_default_is_rich(self) -> None:
        output = format_result(_ok("stats", version="v2", layers={"Domain": 1}))
        assert "Domain" in output
