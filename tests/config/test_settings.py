"""Tests for CareSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from careride.config.settings import CareSettings
from careride.domain.ranking import TieBreak


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CARERIDE_CONFIG", "CARERIDE_SEARCH__TIE_BREAK", "CARERIDE_STORE__IN_MEMORY"):
        monkeypatch.delenv(name, raising=False)


class TestCareSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = CareSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.search.tie_break is TieBreak.ORIGINAL
        assert settings.search.max_query_length == 100
        assert settings.identity.patient_id == "patient_001"
        assert settings.identity.doctor_id == "doc_001"
        assert settings.messaging.min_length == 2
        assert settings.messaging.max_length == 2000

    def test_frozen(self, tmp_path: Path) -> None:
        settings = CareSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]

    def test_db_path_under_root(self, tmp_path: Path) -> None:
        settings = CareSettings.from_cli(root=tmp_path)
        assert settings.db_path == tmp_path / ".careride" / "careride.db"

    def test_db_path_none_in_memory(self, tmp_path: Path) -> None:
        (tmp_path / "careride.toml").write_text("[store]\nin_memory = true\n")
        settings = CareSettings.from_cli(root=tmp_path)
        assert settings.db_path is None


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "careride.toml").write_text(
            '[search]\ntie_break = "rating"\n[identity]\ndoctor_id = "doc_003"\n'
        )
        settings = CareSettings.from_cli(root=tmp_path)
        assert settings.search.tie_break is TieBreak.RATING
        assert settings.identity.doctor_id == "doc_003"
        assert settings.identity.patient_id == "patient_001"  # default preserved

    def test_walk_up_sets_root(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "careride.toml").write_text("[messaging]\nmax_length = 500\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = CareSettings.from_cli()
        assert settings.root == tmp_path.resolve()
        assert settings.messaging.max_length == 500

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[search]\nmax_query_length = 20\n")
        settings = CareSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.search.max_query_length == 20
        assert settings.config_path == custom

    def test_invalid_toml_raises_click_exception(self, tmp_path: Path) -> None:
        (tmp_path / "careride.toml").write_text("[search\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            CareSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "careride.toml").write_text('[search]\ntie_break = "original"\n')
        monkeypatch.setenv("CARERIDE_SEARCH__TIE_BREAK", "rating")
        settings = CareSettings.from_cli(root=tmp_path)
        assert settings.search.tie_break is TieBreak.RATING

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "careride.toml").write_text("quiet = true\n")
        settings = CareSettings.from_cli(root=tmp_path, quiet=False, json_output=True)
        assert settings.quiet is False
        assert settings.json_output is True
