"""Tests for the format_result dispatcher and OutputSettings."""

import json

import pytest
from pydantic import ValidationError

from careride.output.formatters import OutputSettings, format_result
from careride.services.result import ErrorCode, ServiceResult


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert (s.json_output, s.quiet, s.verbose) == (False, False, False)

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            OutputSettings().quiet = True  # type: ignore[misc]


class TestFormatResult:
    def test_json_mode(self) -> None:
        result = ServiceResult.success("subscription_status", status="active")
        data = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert data["ok"] is True
        assert data["data"]["status"] == "active"

    def test_json_wins_over_quiet(self) -> None:
        result = ServiceResult.success("subscription_status", status="active")
        settings = OutputSettings(json_output=True, quiet=True)
        assert json.loads(format_result(result, settings=settings))["op"] == "subscription_status"

    def test_json_error(self) -> None:
        result = ServiceResult.failure("get_doctor", ErrorCode.NOT_FOUND, "Doctor not found: x")
        data = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert data["error"]["code"] == "NOT_FOUND"

    def test_quiet_mode(self) -> None:
        result = ServiceResult.success("boost_status", status="cancelled")
        assert format_result(result, settings=OutputSettings(quiet=True)) == "cancelled"

    def test_default_is_rich(self) -> None:
        result = ServiceResult.success("mark_read", conversation_id="conv_001")
        output = format_result(result)
        assert output.startswith("OK")
        assert "conv_001" in output
