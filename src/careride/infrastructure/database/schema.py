"""SQLAlchemy Core table definitions for the careride store.

Timestamps are INTEGER epoch milliseconds. Booleans are INTEGER 0/1.
List-valued fields are stored as JSON text.
"""

from __future__ import annotations

from sqlalchemy import (
    REAL,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

doctors = Table(
    "doctors",
    metadata,
    Column("id", Text, primary_key=True),
    Column("position", Integer, nullable=False),  # listing order for stable ranking
    Column("name", Text, nullable=False),
    Column("specialty", Text, nullable=False),
    Column("location", Text, nullable=False),
    Column("rating", REAL, nullable=False, default=0.0, server_default="0.0"),
    Column("review_count", Integer, default=0, server_default="0"),
    Column("available_today", Integer, default=0, server_default="0"),
    Column("boosted", Integer, default=0, server_default="0"),
    Column("bio", Text, default="", server_default=""),
    Column("years_of_experience", Integer, default=0, server_default="0"),
    Column("languages", Text),  # JSON array
    Column("accepting_new_patients", Integer, default=1, server_default="1"),
)

entitlements = Table(
    "entitlements",
    metadata,
    Column("id", Text, primary_key=True),
    Column("kind", Text, nullable=False),  # subscription | boost
    Column("owner_id", Text, nullable=False),
    Column("plan_id", Text, nullable=False),
    Column("plan_name", Text, nullable=False),
    Column("price_cents", Integer, nullable=False),
    Column("billing_period", Text, nullable=False),
    Column("boost_multiplier", REAL),
    Column("created_at", Integer, nullable=False),
    Column("expires_at", Integer, nullable=False),
    Column("cancelled_at", Integer),
)

conversations = Table(
    "conversations",
    metadata,
    Column("id", Text, primary_key=True),
    Column("patient_id", Text, nullable=False),
    Column("patient_name", Text, nullable=False),
    Column("doctor_id", Text, ForeignKey("doctors.id"), nullable=False),
    Column("created_at", Integer, nullable=False),
    Column("updated_at", Integer, nullable=False),
    Column("patient_unread", Integer, default=0, server_default="0"),
    Column("doctor_unread", Integer, default=0, server_default="0"),
    UniqueConstraint("patient_id", "doctor_id"),
)

messages = Table(
    "messages",
    metadata,
    Column("id", Text, primary_key=True),
    Column("conversation_id", Text, ForeignKey("conversations.id"), nullable=False),
    Column("sender_id", Text, nullable=False),
    Column("sender_type", Text, nullable=False),  # patient | doctor
    Column("content", Text, nullable=False),
    Column("timestamp", Integer, nullable=False),
)

id_counters = Table(
    "id_counters",
    metadata,
    Column("type_prefix", Text, primary_key=True),
    Column("next_value", Integer, nullable=False, default=1, server_default="1"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_doctors_specialty", doctors.c.specialty)
Index("ix_entitlements_owner", entitlements.c.kind, entitlements.c.owner_id)
Index("ix_conversations_doctor", conversations.c.doctor_id)
Index("ix_messages_conversation", messages.c.conversation_id)
