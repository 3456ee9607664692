"""Sponsored-placement ranking and query matching.

Pure functions over Doctor lists, no infrastructure dependencies.
Ordering contract: every boosted doctor precedes every non-boosted
doctor. Within a tier the order is the tie-break policy:

- ``original``: stable, input order preserved
- ``rating``:   rating descending, input order among equal ratings
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import StrEnum

from pydantic import BaseModel

from careride.domain.models import Doctor
from careride.domain.types import Specialty

HIGH_RATING_THRESHOLD = 4.5


class TieBreak(StrEnum):
    ORIGINAL = "original"
    RATING = "rating"


class RankingReason(BaseModel):
    """Why a doctor appears where it does for a query."""

    model_config = {"frozen": True}

    specialty_match: bool = False
    location_match: bool = False
    high_availability: bool = False
    high_rating: bool = False
    sponsored: bool = False

    def to_display_list(self) -> list[str]:
        reasons: list[str] = []
        if self.sponsored:
            reasons.append("Sponsored placement")
        if self.specialty_match:
            reasons.append("Matches your search specialty")
        if self.location_match:
            reasons.append("Near your location")
        if self.high_availability:
            reasons.append("High availability this week")
        if self.high_rating:
            reasons.append("Highly rated by patients")
        return reasons


def normalize_query(query: str) -> str:
    return query.strip().lower()


def _specialty_matches(specialty: Specialty, needle: str) -> bool:
    return needle in specialty.display_name.lower() or needle in specialty.search_name


def matches_query(doctor: Doctor, query: str) -> bool:
    """Case-insensitive substring match on name, specialty and location.

    A blank query matches every doctor.
    """
    needle = normalize_query(query)
    if not needle:
        return True
    return (
        needle in doctor.name.lower()
        or _specialty_matches(doctor.specialty, needle)
        or needle in doctor.location.lower()
    )


def ranking_reason(
    doctor: Doctor,
    query: str,
    *,
    high_rating_threshold: float = HIGH_RATING_THRESHOLD,
) -> RankingReason:
    """Compute the boolean feature explanation for *doctor* under *query*.

    A blank query yields no specialty or location match.
    """
    needle = normalize_query(query)
    return RankingReason(
        specialty_match=bool(needle) and _specialty_matches(doctor.specialty, needle),
        location_match=bool(needle) and needle in doctor.location.lower(),
        high_availability=doctor.available_today,
        high_rating=doctor.rating >= high_rating_threshold,
        sponsored=doctor.boosted,
    )


def rank_doctors(
    doctors: Iterable[Doctor],
    *,
    tie_break: TieBreak = TieBreak.ORIGINAL,
) -> list[Doctor]:
    """Order doctors sponsored-first, then by the tie-break policy."""
    boosted: list[Doctor] = []
    organic: list[Doctor] = []
    for doctor in doctors:
        (boosted if doctor.boosted else organic).append(doctor)
    if tie_break is TieBreak.RATING:
        # sorted() is stable, so equal ratings keep input order
        boosted = sorted(boosted, key=lambda d: d.rating, reverse=True)
        organic = sorted(organic, key=lambda d: d.rating, reverse=True)
    return boosted + organic


def search_doctors(
    doctors: Sequence[Doctor],
    query: str = "",
    *,
    specialty: Specialty | None = None,
    tie_break: TieBreak = TieBreak.ORIGINAL,
) -> list[Doctor]:
    """Filter *doctors* by query and optional specialty, then rank."""
    matched = [
        d
        for d in doctors
        if (specialty is None or d.specialty is specialty) and matches_query(d, query)
    ]
    return rank_doctors(matched, tie_break=tie_break)
