"""Classification enums shared across the domain.

Specialties, billing periods, entitlement kinds and message parties.
"""

from __future__ import annotations

from enum import StrEnum


class Specialty(StrEnum):
    """Medical specialties a doctor can list under."""

    GENERAL_PRACTICE = "general_practice"
    CARDIOLOGY = "cardiology"
    DERMATOLOGY = "dermatology"
    PEDIATRICS = "pediatrics"
    ORTHOPEDICS = "orthopedics"
    NEUROLOGY = "neurology"
    PSYCHIATRY = "psychiatry"
    GYNECOLOGY = "gynecology"
    OPHTHALMOLOGY = "ophthalmology"
    ENT = "ent"

    @property
    def display_name(self) -> str:
        return _SPECIALTY_DISPLAY_NAMES[self]

    @property
    def search_name(self) -> str:
        """Machine name with underscores read as spaces (``general practice``)."""
        return self.value.replace("_", " ")


_SPECIALTY_DISPLAY_NAMES: dict[Specialty, str] = {
    Specialty.GENERAL_PRACTICE: "General Practice",
    Specialty.CARDIOLOGY: "Cardiology",
    Specialty.DERMATOLOGY: "Dermatology",
    Specialty.PEDIATRICS: "Pediatrics",
    Specialty.ORTHOPEDICS: "Orthopedics",
    Specialty.NEUROLOGY: "Neurology",
    Specialty.PSYCHIATRY: "Psychiatry",
    Specialty.GYNECOLOGY: "Gynecology",
    Specialty.OPHTHALMOLOGY: "Ophthalmology",
    Specialty.ENT: "ENT (Ear, Nose, Throat)",
}


class BillingPeriod(StrEnum):
    """Plan billing cadence."""

    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def months(self) -> int:
        return 12 if self is BillingPeriod.YEARLY else 1

    @property
    def description(self) -> str:
        return "per year" if self is BillingPeriod.YEARLY else "per month"


class EntitlementKind(StrEnum):
    """What an entitlement record pays for."""

    SUBSCRIPTION = "subscription"  # patient messaging
    BOOST = "boost"  # doctor search placement


class Party(StrEnum):
    """Side of a patient/doctor conversation."""

    PATIENT = "patient"
    DOCTOR = "doctor"


class QuickReplyCategory(StrEnum):
    GREETING = "greeting"
    SCHEDULING = "scheduling"
    FOLLOW_UP = "follow_up"
    GENERAL = "general"
