"""Row <-> record conversion shared by repositories, seed and transactions."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from careride.domain.models import Conversation, Doctor, EntitlementRecord, Message


def doctor_to_row(doctor: Doctor, position: int | None = None) -> dict[str, Any]:
    """Column values for *doctor*; *position* is left out when None."""
    row: dict[str, Any] = {
        "id": doctor.id,
        "name": doctor.name,
        "specialty": str(doctor.specialty),
        "location": doctor.location,
        "rating": doctor.rating,
        "review_count": doctor.review_count,
        "available_today": int(doctor.available_today),
        "boosted": int(doctor.boosted),
        "bio": doctor.bio,
        "years_of_experience": doctor.years_of_experience,
        "languages": json.dumps(list(doctor.languages)),
        "accepting_new_patients": int(doctor.accepting_new_patients),
    }
    if position is not None:
        row["position"] = position
    return row


def row_to_doctor(row: Mapping[str, Any]) -> Doctor:
    languages = json.loads(row["languages"]) if row["languages"] else ["English"]
    return Doctor(
        id=row["id"],
        name=row["name"],
        specialty=row["specialty"],
        location=row["location"],
        rating=float(row["rating"]),
        review_count=int(row["review_count"] or 0),
        available_today=bool(row["available_today"]),
        boosted=bool(row["boosted"]),
        bio=row["bio"] or "",
        years_of_experience=int(row["years_of_experience"] or 0),
        languages=tuple(languages),
        accepting_new_patients=bool(row["accepting_new_patients"]),
    )


def entitlement_to_row(record: EntitlementRecord) -> dict[str, Any]:
    return record.model_dump(mode="json")


def row_to_entitlement(row: Mapping[str, Any]) -> EntitlementRecord:
    return EntitlementRecord.model_validate(dict(row))


def message_to_row(message: Message) -> dict[str, Any]:
    return message.model_dump(mode="json")


def row_to_message(row: Mapping[str, Any]) -> Message:
    return Message.model_validate(dict(row))


def conversation_to_row(conversation: Conversation) -> dict[str, Any]:
    return conversation.model_dump(mode="json", exclude={"last_message"})


def row_to_conversation(row: Mapping[str, Any], last_message: Message | None) -> Conversation:
    data = {k: row[k] for k in row.keys() if k in Conversation.model_fields}
    return Conversation.model_validate({**data, "last_message": last_message})
