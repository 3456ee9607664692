"""SearchService — doctor search with sponsored placement.

Read-only surfaces over the store's doctor listings:
- search: free-text query + optional specialty, ranked sponsored-first
- get: one doctor with its ranking explanation
- by_specialty: ranked listing of one specialty
- specialties: the specialty catalog

A doctor's effective ``boosted`` flag comes from its current boost
entitlement when it has one; otherwise the listing's stored flag is used.
"""

from __future__ import annotations

import logging
from typing import Any

from careride.domain.lifecycle import EntitlementState
from careride.domain.models import Doctor
from careride.domain.ranking import ranking_reason, search_doctors
from careride.domain.types import EntitlementKind, Specialty
from careride.services.base import BaseService
from careride.services.result import ErrorCode, ServiceResult
from careride.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class SearchService(BaseService):
    """Doctor search and lookup."""

    def _doctors(self, *, specialty: Specialty | None = None) -> list[Doctor]:
        """Listing-ordered doctors with live boost status applied."""
        listed = self._store.doctors.list_all(specialty=specialty)
        boosts = self._store.entitlements.current_by_owner(EntitlementKind.BOOST)
        now = self._now()
        effective: list[Doctor] = []
        for doctor in listed:
            record = boosts.get(doctor.id)
            if record is not None:
                boosted = EntitlementState.of(record, now).can_access()
                if boosted != doctor.boosted:
                    doctor = doctor.model_copy(update={"boosted": boosted})
            effective.append(doctor)
        return effective

    def _item(self, doctor: Doctor, query: str) -> dict[str, Any]:
        reason = ranking_reason(
            doctor,
            query,
            high_rating_threshold=self.settings.search.high_rating_threshold,
        )
        return {
            **doctor.to_summary(),
            "ranking": reason.model_dump(),
            "reasons": reason.to_display_list(),
        }

    @staticmethod
    def _parse_specialty(
        op: str, value: str | Specialty | None
    ) -> Specialty | ServiceResult | None:
        if value is None or isinstance(value, Specialty):
            return value
        try:
            return Specialty(value.strip().lower())
        except ValueError:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_SPECIALTY,
                f"Unknown specialty: {value}",
                valid=[str(s) for s in Specialty],
            )

    @traced
    def search(
        self,
        query: str = "",
        *,
        specialty: str | Specialty | None = None,
        limit: int | None = None,
    ) -> ServiceResult:
        """Rank doctors matching *query* (blank matches all).

        Args:
            query: Free text matched against name, specialty and location.
            specialty: Optional specialty filter (enum or its value).
            limit: Truncate the ranked list after this many items; must not
                be negative.
        """
        trimmed = query.strip()
        max_len = self.settings.search.max_query_length
        if len(trimmed) > max_len:
            return ServiceResult.failure(
                "search",
                ErrorCode.QUERY_TOO_LONG,
                f"Search query is too long (max {max_len} characters)",
                length=len(trimmed),
            )

        if limit is not None and limit < 0:
            return ServiceResult.failure(
                "search", ErrorCode.INVALID_LIMIT, f"Limit must not be negative: {limit}"
            )

        parsed = self._parse_specialty("search", specialty)
        if isinstance(parsed, ServiceResult):
            return parsed

        with trace_span("load_doctors") as span:
            doctors = self._doctors()
            if span:
                span.annotate("candidates", len(doctors))

        ranked = search_doctors(
            doctors,
            trimmed,
            specialty=parsed,
            tie_break=self.settings.search.tie_break,
        )
        total = len(ranked)
        if limit is not None:
            ranked = ranked[:limit]

        logger.debug("search query=%r specialty=%s matched=%d", trimmed, parsed, total)
        return ServiceResult.success(
            "search",
            query=trimmed,
            specialty=str(parsed) if parsed else None,
            count=len(ranked),
            total=total,
            items=[self._item(d, trimmed) for d in ranked],
        )

    @traced
    def get(self, doctor_id: str) -> ServiceResult:
        """Retrieve one doctor with bio, languages and ranking explanation."""
        match = [d for d in self._doctors() if d.id == doctor_id]
        if not match:
            return ServiceResult.failure(
                "get_doctor", ErrorCode.NOT_FOUND, f"Doctor not found: {doctor_id}"
            )
        doctor = match[0]
        return ServiceResult.success(
            "get_doctor",
            **self._item(doctor, ""),
            bio=doctor.bio,
            years_of_experience=doctor.years_of_experience,
            languages=list(doctor.languages),
            accepting_new_patients=doctor.accepting_new_patients,
        )

    @traced
    def by_specialty(self, specialty: str | Specialty) -> ServiceResult:
        parsed = self._parse_specialty("by_specialty", specialty)
        if isinstance(parsed, ServiceResult):
            return parsed
        ranked = search_doctors(
            self._doctors(specialty=parsed),
            tie_break=self.settings.search.tie_break,
        )
        return ServiceResult.success(
            "by_specialty",
            specialty=str(parsed),
            count=len(ranked),
            items=[self._item(d, "") for d in ranked],
        )

    def specialties(self) -> ServiceResult:
        items = [{"id": str(s), "name": s.display_name} for s in Specialty]
        return ServiceResult.success("specialties", count=len(items), items=items)
