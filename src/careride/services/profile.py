"""ProfileService — the configured doctor's own listing.

Edits write straight to the doctor's listing, so search results and
``doctors show`` pick them up immediately:
- profile: the listing as stored, with the live boosted flag
- toggle_availability / toggle_accepting: flip one listing flag
- set_languages: replace the spoken languages
- update: change bio and/or location
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from careride.domain.lifecycle import EntitlementState
from careride.domain.models import Doctor
from careride.domain.types import EntitlementKind
from careride.services.base import BaseService
from careride.services.result import ErrorCode, ServiceResult
from careride.services.telemetry import traced

logger = logging.getLogger(__name__)


def normalize_languages(languages: Iterable[str]) -> tuple[str, ...]:
    """Trim, drop blanks and case-insensitive duplicates; first spelling wins."""
    seen: set[str] = set()
    cleaned: list[str] = []
    for language in languages:
        name = language.strip()
        if name and name.casefold() not in seen:
            seen.add(name.casefold())
            cleaned.append(name)
    return tuple(cleaned)


class ProfileService(BaseService):
    """Self-service edits for the doctor in ``identity.doctor_id``."""

    @property
    def doctor_id(self) -> str:
        return self.settings.identity.doctor_id

    def _load(self, op: str) -> Doctor | ServiceResult:
        doctor = self._store.doctors.get(self.doctor_id)
        if doctor is None:
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"Doctor not found: {self.doctor_id}"
            )
        return doctor

    def _result(self, op: str, doctor: Doctor) -> ServiceResult:
        boosted = doctor.boosted
        record = self._store.entitlements.current(EntitlementKind.BOOST, doctor.id)
        if record is not None:
            boosted = EntitlementState.of(record, self._now()).can_access()
        data: dict[str, Any] = {
            **doctor.to_summary(),
            "boosted": boosted,
            "bio": doctor.bio,
            "years_of_experience": doctor.years_of_experience,
            "languages": list(doctor.languages),
            "accepting_new_patients": doctor.accepting_new_patients,
        }
        return ServiceResult.success(op, **data)

    def _save(self, op: str, doctor: Doctor, **changes: Any) -> ServiceResult:
        updated = doctor.model_copy(update=changes)
        with self._store.transaction() as txn:
            txn.update_doctor(updated)
        logger.info("profile updated doctor=%s fields=%s", doctor.id, ",".join(sorted(changes)))
        return self._result(op, updated)

    @traced
    def profile(self) -> ServiceResult:
        doctor = self._load("profile")
        if isinstance(doctor, ServiceResult):
            return doctor
        return self._result("profile", doctor)

    @traced
    def toggle_availability(self) -> ServiceResult:
        """Flip whether the doctor shows as available today."""
        op = "profile_availability"
        doctor = self._load(op)
        if isinstance(doctor, ServiceResult):
            return doctor
        return self._save(op, doctor, available_today=not doctor.available_today)

    @traced
    def toggle_accepting(self) -> ServiceResult:
        """Flip whether the doctor accepts new patients."""
        op = "profile_accepting"
        doctor = self._load(op)
        if isinstance(doctor, ServiceResult):
            return doctor
        return self._save(op, doctor, accepting_new_patients=not doctor.accepting_new_patients)

    @traced
    def set_languages(self, languages: Iterable[str]) -> ServiceResult:
        """Replace the spoken languages; at least one is required."""
        op = "profile_languages"
        cleaned = normalize_languages(languages)
        if not cleaned:
            return ServiceResult.failure(
                op, ErrorCode.INVALID_PROFILE, "At least one language is required"
            )
        doctor = self._load(op)
        if isinstance(doctor, ServiceResult):
            return doctor
        return self._save(op, doctor, languages=cleaned)

    @traced
    def update(self, *, bio: str | None = None, location: str | None = None) -> ServiceResult:
        """Change bio and/or location; omitted fields keep their value.

        A blank bio clears it. A location must not be blank.
        """
        op = "profile_update"
        changes: dict[str, Any] = {}
        if bio is not None:
            changes["bio"] = bio.strip()
        if location is not None:
            if not location.strip():
                return ServiceResult.failure(
                    op, ErrorCode.INVALID_PROFILE, "Location cannot be empty"
                )
            changes["location"] = location.strip()
        if not changes:
            return ServiceResult.failure(op, ErrorCode.INVALID_PROFILE, "Nothing to update")
        doctor = self._load(op)
        if isinstance(doctor, ServiceResult):
            return doctor
        return self._save(op, doctor, **changes)
