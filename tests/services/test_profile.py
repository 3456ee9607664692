"""Tests for ProfileService (the configured doctor's listing)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from careride.config.models import IdentityConfig, StoreConfig
from careride.config.settings import CareSettings
from careride.infrastructure.store import Store
from careride.services.profile import ProfileService, normalize_languages
from careride.services.search import SearchService


class TestNormalizeLanguages:
    def test_trims_and_dedupes(self) -> None:
        assert normalize_languages([" English", "spanish", "ENGLISH ", "Spanish"]) == (
            "English",
            "spanish",
        )

    def test_blanks_dropped(self) -> None:
        assert normalize_languages(["", "  "]) == ()


class TestProfile:
    def test_profile(self, store: Store) -> None:
        result = ProfileService(store).profile()
        assert result.ok
        assert result.op == "profile"
        assert result.data["id"] == "doc_001"
        assert result.data["languages"] == ["English", "Mandarin"]
        assert result.data["available_today"] is True
        assert result.data["boosted"] is True

    def test_unknown_doctor(self, tmp_path: Path, clock: Any) -> None:
        settings = CareSettings(
            root=tmp_path,
            store=StoreConfig(in_memory=True),
            identity=IdentityConfig(doctor_id="doc_999"),
        )
        s = Store(settings, clock=clock)
        try:
            service = ProfileService(s)
            assert service.profile().error_code == "NOT_FOUND"
            assert service.toggle_availability().error_code == "NOT_FOUND"
            assert service.set_languages(["English"]).error_code == "NOT_FOUND"
        finally:
            s.close()

    def test_boosted_flag_follows_boost(self, store: Store, clock: Any) -> None:
        clock.advance(days=16)
        assert ProfileService(store).profile().data["boosted"] is False


class TestToggles:
    def test_toggle_availability(self, store: Store) -> None:
        service = ProfileService(store)
        first = service.toggle_availability()
        assert first.ok
        assert first.op == "profile_availability"
        assert first.data["available_today"] is False
        assert service.toggle_availability().data["available_today"] is True

    def test_toggle_accepting(self, store: Store) -> None:
        result = ProfileService(store).toggle_accepting()
        assert result.op == "profile_accepting"
        assert result.data["accepting_new_patients"] is False
        assert store.doctors.get("doc_001").accepting_new_patients is False

    def test_listing_position_kept(self, store: Store) -> None:
        before = [d.id for d in store.doctors.list_all()]
        ProfileService(store).toggle_availability()
        assert [d.id for d in store.doctors.list_all()] == before

    def test_other_doctors_untouched(self, store: Store) -> None:
        before = store.doctors.get("doc_002")
        ProfileService(store).toggle_availability()
        assert store.doctors.get("doc_002") == before

    def test_search_sees_edit(self, store: Store) -> None:
        ProfileService(store).toggle_accepting()
        assert SearchService(store).get("doc_001").data["accepting_new_patients"] is False


class TestLanguages:
    def test_set_languages(self, store: Store) -> None:
        result = ProfileService(store).set_languages(["English", " Cantonese ", "english"])
        assert result.ok
        assert result.op == "profile_languages"
        assert result.data["languages"] == ["English", "Cantonese"]
        assert store.doctors.get("doc_001").languages == ("English", "Cantonese")

    @pytest.mark.parametrize("languages", [[], ["", "   "]])
    def test_empty_rejected(self, store: Store, languages: list[str]) -> None:
        result = ProfileService(store).set_languages(languages)
        assert not result.ok
        assert result.error_code == "INVALID_PROFILE"
        assert store.doctors.get("doc_001").languages == ("English", "Mandarin")


class TestUpdate:
    def test_update_location(self, store: Store) -> None:
        result = ProfileService(store).update(location="  Oakland, CA ")
        assert result.ok
        assert result.op == "profile_update"
        assert result.data["location"] == "Oakland, CA"
        assert store.doctors.get("doc_001").bio.startswith("Board-certified")

    def test_blank_bio_clears(self, store: Store) -> None:
        result = ProfileService(store).update(bio="")
        assert result.data["bio"] == ""

    def test_blank_location_rejected(self, store: Store) -> None:
        result = ProfileService(store).update(location="  ")
        assert result.error_code == "INVALID_PROFILE"
        assert store.doctors.get("doc_001").location == "San Francisco, CA"

    def test_nothing_to_update(self, store: Store) -> None:
        result = ProfileService(store).update()
        assert result.error_code == "INVALID_PROFILE"
