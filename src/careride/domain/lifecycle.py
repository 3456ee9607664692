"""Entitlement lifecycle — the sealed None/Active/Cancelled/Expired state.

Subscriptions (patient messaging) and boosts (doctor search placement)
share one lifecycle. Status is always derived from a record and the
current time, never stored:

- no record                          -> none
- cancelled, now <  expires_at       -> cancelled (access retained)
- cancelled, now >= expires_at       -> expired
- not cancelled, now <  expires_at   -> active
- not cancelled, now >= expires_at   -> expired

Explicit transitions (purchase, cancel, reactivate) are validated against
``ENTITLEMENT_TRANSITIONS``; expiry happens by the passage of time.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from careride.domain.models import MS_PER_DAY, EntitlementRecord, format_date


class EntitlementStatus(StrEnum):
    NONE = "none"
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


# --- Transition map ---

ENTITLEMENT_TRANSITIONS: dict[str, list[str]] = {
    "none": ["active"],  # purchase
    "active": ["cancelled", "expired", "active"],  # cancel / time / re-purchase
    "cancelled": ["active", "expired"],  # reactivate or re-purchase / time
    "expired": ["active"],  # purchase again
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]] = ENTITLEMENT_TRANSITIONS,
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed


def derive_status(record: EntitlementRecord | None, now: int) -> EntitlementStatus:
    """Compute the lifecycle status of *record* at time *now*."""
    if record is None:
        return EntitlementStatus.NONE
    if record.is_expired(now):
        return EntitlementStatus.EXPIRED
    if record.cancelled_at is not None:
        return EntitlementStatus.CANCELLED
    return EntitlementStatus.ACTIVE


def can_access(status: EntitlementStatus, record: EntitlementRecord | None, now: int) -> bool:
    """Whether the gated action is currently allowed.

    True iff status is active, or cancelled with expiry still in the future.
    """
    if status is EntitlementStatus.ACTIVE:
        return True
    if status is EntitlementStatus.CANCELLED and record is not None:
        return record.expires_at > now
    return False


def days_remaining(record: EntitlementRecord, now: int) -> int:
    """Whole days left until expiry, never negative."""
    return max(0, (record.expires_at - now) // MS_PER_DAY)


class EntitlementState(BaseModel):
    """A status snapshot: derived status plus the record it came from."""

    model_config = {"frozen": True}

    status: EntitlementStatus
    record: EntitlementRecord | None = None
    as_of: int

    @classmethod
    def of(cls, record: EntitlementRecord | None, now: int) -> EntitlementState:
        return cls(status=derive_status(record, now), record=record, as_of=now)

    def can_access(self) -> bool:
        return can_access(self.status, self.record, self.as_of)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": str(self.status),
            "can_access": self.can_access(),
        }
        if self.record is None:
            return data
        data["id"] = self.record.id
        data["plan_id"] = self.record.plan_id
        data["plan_name"] = self.record.plan_name
        data["expires_at"] = self.record.expires_at
        if self.status is EntitlementStatus.ACTIVE:
            data["days_remaining"] = days_remaining(self.record, self.as_of)
            data["renews_on"] = format_date(self.record.expires_at)
        elif self.status is EntitlementStatus.CANCELLED:
            data["days_remaining"] = days_remaining(self.record, self.as_of)
            data["active_until"] = format_date(self.record.expires_at)
        else:
            data["expired_on"] = format_date(self.record.expires_at)
        return data
