"""Immutable domain records.

All timestamps are integer epoch milliseconds (UTC). Records are frozen
pydantic models; state changes produce new records via ``model_copy``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from careride.domain.types import BillingPeriod, EntitlementKind, Party, Specialty

MS_PER_DAY = 24 * 60 * 60 * 1000
DAYS_PER_BILLING_MONTH = 30


def format_cents(cents: int) -> str:
    """Render an amount in cents as ``$12.34``."""
    return f"${cents // 100}.{cents % 100:02d}"


def format_date(timestamp_ms: int) -> str:
    """Render an epoch-millisecond timestamp as ``Mar 5, 2026`` (UTC)."""
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


class Doctor(BaseModel):
    """A doctor listing as shown in search results."""

    model_config = {"frozen": True}

    id: str
    name: str
    specialty: Specialty
    location: str
    rating: float = Field(ge=0.0, le=5.0)
    review_count: int = 0
    available_today: bool = False
    boosted: bool = False
    bio: str = ""
    years_of_experience: int = 0
    languages: tuple[str, ...] = ("English",)
    accepting_new_patients: bool = True

    def to_summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "specialty": self.specialty.display_name,
            "location": self.location,
            "rating": self.rating,
            "review_count": self.review_count,
            "available_today": self.available_today,
            "boosted": self.boosted,
        }


class EntitlementRecord(BaseModel):
    """A purchased subscription or boost.

    Status is never stored; it is derived from ``expires_at`` and
    ``cancelled_at`` against the current time (see ``lifecycle``).
    """

    model_config = {"frozen": True}

    id: str
    kind: EntitlementKind
    owner_id: str
    plan_id: str
    plan_name: str
    price_cents: int
    billing_period: BillingPeriod
    boost_multiplier: float | None = None
    created_at: int
    expires_at: int
    cancelled_at: int | None = None

    def is_expired(self, now: int) -> bool:
        return now >= self.expires_at

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["price"] = format_cents(self.price_cents)
        data["expires"] = format_date(self.expires_at)
        return data


class Message(BaseModel):
    model_config = {"frozen": True}

    id: str
    conversation_id: str
    sender_id: str
    sender_type: Party
    content: str
    timestamp: int


class Conversation(BaseModel):
    """A patient/doctor thread with per-side unread counters."""

    model_config = {"frozen": True}

    id: str
    patient_id: str
    patient_name: str
    doctor_id: str
    created_at: int
    updated_at: int
    patient_unread: int = 0
    doctor_unread: int = 0
    last_message: Message | None = None

    def unread_for(self, reader: Party) -> int:
        return self.patient_unread if reader is Party.PATIENT else self.doctor_unread

    @property
    def last_message_preview(self) -> str:
        if self.last_message is None:
            return "No messages yet"
        preview = self.last_message.content[:50]
        return f"{preview}..." if len(preview) == 50 else preview


class BoostAnalytics(BaseModel):
    """Stub performance numbers for a doctor's boost dashboard."""

    model_config = {"frozen": True}

    profile_views: int
    profile_views_change: int
    search_appearances: int
    search_appearances_change: int
    message_requests: int
    message_requests_change: int
    average_position: float
    position_change: float
    period: str = "Last 30 days"

    @staticmethod
    def format_change(change: int, current: int) -> str:
        """Percent change relative to the previous period (``current - change``)."""
        previous = current - change
        if previous == 0:
            return "+100%" if change > 0 else "0%"
        percent = int(change / previous * 100)
        return f"+{percent}%" if percent >= 0 else f"{percent}%"

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump()
        data["profile_views_change_percent"] = self.format_change(
            self.profile_views_change, self.profile_views
        )
        data["search_appearances_change_percent"] = self.format_change(
            self.search_appearances_change, self.search_appearances
        )
        data["message_requests_change_percent"] = self.format_change(
            self.message_requests_change, self.message_requests
        )
        return data
