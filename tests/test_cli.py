"""Tests for the root careride CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from careride import __version__
from careride.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "careride" in result.output
    for group in ("doctors", "subscription", "boost", "messages", "profile"):
        assert group in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/missing-careride.toml", "--version"])
    assert result.exit_code == 0


def test_unknown_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["appointments"])
    assert result.exit_code != 0


@pytest.mark.usefixtures("_isolated_workspace")
class TestConfigIntegration:
    def test_store_created_under_workspace(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["doctors", "specialties"])
        assert result.exit_code == 0
        assert (tmp_path / ".careride" / "careride.db").is_file()

    def test_toml_identity_override(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "careride.toml").write_text('[identity]\ndoctor_id = "doc_002"\n')
        result = cli_runner.invoke(cli, ["--json", "boost", "status"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["owner_id"] == "doc_002"
        assert data["data"]["status"] == "none"

    def test_env_overrides_toml(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "careride.toml").write_text('[identity]\ndoctor_id = "doc_002"\n')
        monkeypatch.setenv("CARERIDE_IDENTITY__DOCTOR_ID", "doc_001")
        result = cli_runner.invoke(cli, ["--json", "boost", "status"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["owner_id"] == "doc_001"
        assert data["data"]["status"] == "active"

    def test_explicit_config_path(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "other.toml"
        config.write_text("[search]\nmax_query_length = 5\n")
        result = cli_runner.invoke(
            cli, ["-c", str(config), "--json", "doctors", "search", "cardio"]
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error"]["code"] == "QUERY_TOO_LONG"

    def test_invalid_toml(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "careride.toml").write_text("[store\n")
        result = cli_runner.invoke(cli, ["doctors", "specialties"])
        assert result.exit_code != 0
        assert "Invalid TOML" in result.output

    def test_doctor_flag_overrides_toml(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "careride.toml").write_text('[identity]\ndoctor_id = "doc_002"\n')
        result = cli_runner.invoke(cli, ["--json", "--doctor", "doc_003", "boost", "status"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["owner_id"] == "doc_003"

    def test_patient_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--patient", "patient_002", "messages", "inbox"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert [item["id"] for item in data["items"]] == ["conv_003"]
