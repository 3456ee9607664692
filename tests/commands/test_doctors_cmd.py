"""Tests for the doctors command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from careride.cli import cli


@pytest.mark.usefixtures("_isolated_workspace")
class TestSearchCommand:
    def test_blank_query_lists_everyone_sponsored_first(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "doctors", "search"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        ids = [item["id"] for item in data["data"]["items"]]
        assert ids[:3] == ["doc_001", "doc_003", "doc_008"]
        assert len(ids) == 8

    def test_location_query(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "doctors", "search", "san francisco"])
        assert result.exit_code == 0
        ids = [item["id"] for item in json.loads(result.output)["data"]["items"]]
        assert ids == ["doc_001", "doc_002", "doc_005", "doc_007"]

    def test_specialty_filter_case_insensitive(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "doctors", "search", "--specialty", "DERMATOLOGY"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["specialty"] == "dermatology"
        assert [item["id"] for item in data["items"]] == ["doc_003"]

    def test_invalid_specialty_rejected_by_click(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["doctors", "search", "--specialty", "podiatry"])
        assert result.exit_code == 2

    def test_limit(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "doctors", "search", "--limit", "2"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["count"] == 2
        assert data["total"] == 8

    def test_negative_limit(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["doctors", "search", "--limit", "-1"])
        assert result.exit_code == 2

    def test_query_too_long(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "doctors", "search", "x" * 101])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["error"]["code"] == "QUERY_TOO_LONG"

    def test_table_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["doctors", "search", "oakland"])
        assert result.exit_code == 0
        assert "doc_003" in result.output
        assert "Sponsored" in result.output

    def test_no_results(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["doctors", "search", "podiatry"])
        assert result.exit_code == 0
        assert "No doctors found for 'podiatry'." in result.output

    def test_quiet_prints_ids(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "doctors", "search", "oakland"])
        assert result.exit_code == 0
        assert result.output.strip() == "doc_003"


@pytest.mark.usefixtures("_isolated_workspace")
class TestGetCommand:
    def test_get_existing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "doctors", "get", "doc_001"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["name"] == "Dr. Sarah Chen"
        assert data["boosted"] is True
        assert "Sponsored placement" in data["reasons"]

    def test_get_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["doctors", "get", "doc_999"])
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.output

    def test_profile_panel(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["doctors", "get", "doc_002"])
        assert result.exit_code == 0
        assert "Dr. Michael Roberts" in result.output


@pytest.mark.usefixtures("_isolated_workspace")
class TestSpecialtiesCommand:
    def test_lists_all(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "doctors", "specialties"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["count"] == 10
        assert {"id": "ent", "name": "ENT (Ear, Nose, Throat)"} in data["items"]

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "doctors", "specialties"])
        assert result.exit_code == 0
        assert "cardiology" in result.output.splitlines()
