"""Tests for the profile command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from careride.cli import cli


@pytest.mark.usefixtures("_isolated_workspace")
class TestProfileCommands:
    def test_show(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["profile", "show"])
        assert result.exit_code == 0
        assert "Dr. Sarah Chen" in result.output
        assert "Languages: English, Mandarin" in result.output

    def test_availability_persists(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "profile", "availability"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["available_today"] is False

        shown = cli_runner.invoke(cli, ["--json", "doctors", "get", "doc_001"])
        assert json.loads(shown.output)["data"]["available_today"] is False

    def test_accepting_for_other_doctor(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--doctor", "doc_005", "profile", "accepting"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["id"] == "doc_005"
        assert data["accepting_new_patients"] is True

    def test_languages(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "profile", "languages", "English", "Spanish"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["languages"] == ["English", "Spanish"]

    def test_languages_required(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["profile", "languages"])
        assert result.exit_code == 2

    def test_blank_languages_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "profile", "languages", " "])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVALID_PROFILE"

    def test_edit_location(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "profile", "edit", "--location", "Oakland, CA"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["location"] == "Oakland, CA"

    def test_edit_without_options(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["profile", "edit"])
        assert result.exit_code == 1
        assert "Nothing to update" in result.output

    def test_unknown_doctor(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--doctor", "doc_999", "profile", "show"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_FOUND"

    def test_quiet_prints_id(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "profile", "show"])
        assert result.exit_code == 0
        assert result.output.strip() == "doc_001"
