"""Read repository for conversations and messages."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, literal_column, select
from sqlalchemy.engine import Connection, Engine

from careride.domain.models import Conversation, Message
from careride.infrastructure.database.schema import conversations, messages
from careride.infrastructure.repositories.rows import row_to_conversation, row_to_message

# Insertion order; breaks ties between messages sent in the same millisecond.
_ROWID = literal_column("messages.rowid")


class MessageRepository:
    """Encapsulates SQL for the patient/doctor inboxes."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @staticmethod
    def _last_message(conn: Connection, conversation_id: str) -> Message | None:
        row = (
            conn.execute(
                select(messages)
                .where(messages.c.conversation_id == conversation_id)
                .order_by(messages.c.timestamp.desc(), _ROWID.desc())
                .limit(1)
            )
            .mappings()
            .first()
        )
        return row_to_message(row) if row is not None else None

    def _load(self, stmt: Select[Any]) -> list[Conversation]:
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
            return [row_to_conversation(row, self._last_message(conn, row["id"])) for row in rows]

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        found = self._load(select(conversations).where(conversations.c.id == conversation_id))
        return found[0] if found else None

    def find_conversation(self, patient_id: str, doctor_id: str) -> Conversation | None:
        found = self._load(
            select(conversations).where(
                conversations.c.patient_id == patient_id,
                conversations.c.doctor_id == doctor_id,
            )
        )
        return found[0] if found else None

    def for_patient(self, patient_id: str) -> list[Conversation]:
        """A patient's conversations, most recent activity first."""
        return self._load(
            select(conversations)
            .where(conversations.c.patient_id == patient_id)
            .order_by(conversations.c.updated_at.desc())
        )

    def for_doctor(self, doctor_id: str) -> list[Conversation]:
        return self._load(
            select(conversations)
            .where(conversations.c.doctor_id == doctor_id)
            .order_by(conversations.c.updated_at.desc())
        )

    def messages(self, conversation_id: str) -> list[Message]:
        """Messages of a conversation, oldest first."""
        stmt = (
            select(messages)
            .where(messages.c.conversation_id == conversation_id)
            .order_by(messages.c.timestamp, _ROWID)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [row_to_message(row) for row in rows]
