"""Demo dataset for the simulated backend.

Eight doctors (three boosted), an active Pro Boost for ``doc_001`` that
started 15 days ago, and three conversations. Timestamps are relative
to the *now* passed in, so a fresh store always looks recent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import insert

from careride.domain.models import MS_PER_DAY, Conversation, Doctor, EntitlementRecord, Message
from careride.domain.types import BillingPeriod, EntitlementKind, Party, Specialty
from careride.infrastructure.database.schema import conversations, doctors, entitlements, messages
from careride.infrastructure.repositories.rows import (
    conversation_to_row,
    doctor_to_row,
    entitlement_to_row,
    message_to_row,
)

if TYPE_CHECKING:
    from sqlalchemy import Connection

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE

SEED_PATIENT_ID = "patient_001"
SEED_PATIENT_NAME = "John Smith"
SEED_DOCTOR_ID = "doc_001"

DEMO_DOCTORS: tuple[Doctor, ...] = (
    Doctor(
        id="doc_001",
        name="Dr. Sarah Chen",
        specialty=Specialty.CARDIOLOGY,
        location="San Francisco, CA",
        rating=4.9,
        review_count=127,
        available_today=True,
        boosted=True,
        bio=(
            "Board-certified cardiologist with 15 years of experience in preventive "
            "cardiology and heart disease management."
        ),
        years_of_experience=15,
        languages=("English", "Mandarin"),
    ),
    Doctor(
        id="doc_002",
        name="Dr. Michael Roberts",
        specialty=Specialty.GENERAL_PRACTICE,
        location="San Francisco, CA",
        rating=4.7,
        review_count=89,
        available_today=True,
        bio="Family medicine physician focused on whole-person health and preventive care.",
        years_of_experience=10,
        languages=("English", "Spanish"),
    ),
    Doctor(
        id="doc_003",
        name="Dr. Emily Watson",
        specialty=Specialty.DERMATOLOGY,
        location="Oakland, CA",
        rating=4.8,
        review_count=203,
        boosted=True,
        bio=(
            "Dermatologist specializing in medical and cosmetic dermatology, "
            "including skin cancer screening."
        ),
        years_of_experience=12,
    ),
    Doctor(
        id="doc_004",
        name="Dr. James Park",
        specialty=Specialty.PEDIATRICS,
        location="San Jose, CA",
        rating=4.6,
        review_count=156,
        available_today=True,
        bio=(
            "Pediatrician dedicated to providing compassionate care for children "
            "from birth through adolescence."
        ),
        years_of_experience=8,
        languages=("English", "Korean"),
    ),
    Doctor(
        id="doc_005",
        name="Dr. Lisa Thompson",
        specialty=Specialty.PSYCHIATRY,
        location="San Francisco, CA",
        rating=4.9,
        review_count=78,
        available_today=True,
        bio="Psychiatrist specializing in anxiety, depression, and ADHD treatment for adults.",
        years_of_experience=14,
        accepting_new_patients=False,
    ),
    Doctor(
        id="doc_006",
        name="Dr. Robert Kim",
        specialty=Specialty.ORTHOPEDICS,
        location="Palo Alto, CA",
        rating=4.5,
        review_count=92,
        bio="Orthopedic surgeon with expertise in sports medicine and joint replacement.",
        years_of_experience=18,
        languages=("English", "Korean"),
    ),
    Doctor(
        id="doc_007",
        name="Dr. Maria Garcia",
        specialty=Specialty.GYNECOLOGY,
        location="San Francisco, CA",
        rating=4.8,
        review_count=167,
        available_today=True,
        bio=(
            "OB-GYN providing comprehensive women's health care with a focus "
            "on patient education."
        ),
        years_of_experience=11,
        languages=("English", "Spanish"),
    ),
    Doctor(
        id="doc_008",
        name="Dr. David Lee",
        specialty=Specialty.NEUROLOGY,
        location="Berkeley, CA",
        rating=4.7,
        review_count=64,
        boosted=True,
        bio="Neurologist specializing in headache disorders, epilepsy, and movement disorders.",
        years_of_experience=16,
        languages=("English", "Cantonese"),
    ),
)


def _seed_boost(now: int) -> EntitlementRecord:
    return EntitlementRecord(
        id="boost_existing_001",
        kind=EntitlementKind.BOOST,
        owner_id=SEED_DOCTOR_ID,
        plan_id="boost_pro",
        plan_name="Pro Boost",
        price_cents=9999,
        billing_period=BillingPeriod.MONTHLY,
        boost_multiplier=3.0,
        created_at=now - 15 * MS_PER_DAY,
        expires_at=now + 15 * MS_PER_DAY,
    )


def _msg(
    msg_id: str, conv_id: str, sender_id: str, sender: Party, content: str, ts: int
) -> Message:
    return Message(
        id=msg_id,
        conversation_id=conv_id,
        sender_id=sender_id,
        sender_type=sender,
        content=content,
        timestamp=ts,
    )


def _seed_threads(now: int) -> list[tuple[Conversation, list[Message]]]:
    p1 = SEED_PATIENT_ID
    thread1 = [
        _msg(
            "msg_001",
            "conv_001",
            p1,
            Party.PATIENT,
            "Hi Dr. Roberts, I've been having some headaches lately. Should I be concerned?",
            now - 2 * MS_PER_HOUR,
        ),
        _msg(
            "msg_002",
            "conv_001",
            "doc_002",
            Party.DOCTOR,
            "Hello! I'd be happy to help. Can you tell me more about the headaches? "
            "How often do they occur and where is the pain located?",
            now - 1 * MS_PER_HOUR,
        ),
        _msg(
            "msg_003",
            "conv_001",
            p1,
            Party.PATIENT,
            "They happen about 2-3 times a week, usually in the afternoon. "
            "The pain is mostly around my temples.",
            now - 30 * MS_PER_MINUTE,
        ),
    ]
    thread2 = [
        _msg(
            "msg_004",
            "conv_002",
            p1,
            Party.PATIENT,
            "Dr. Park, my child has a fever of 101°F. What should I do?",
            now - 24 * MS_PER_HOUR,
        ),
        _msg(
            "msg_005",
            "conv_002",
            "doc_004",
            Party.DOCTOR,
            "For a fever of 101°F, you can give children's acetaminophen or ibuprofen "
            "as directed. Make sure they stay hydrated. If the fever persists beyond "
            "3 days or goes above 103°F, please bring them in.",
            now - 23 * MS_PER_HOUR,
        ),
    ]
    thread3 = [
        _msg(
            "msg_006",
            "conv_003",
            "patient_002",
            Party.PATIENT,
            "Hi Dr. Chen, I've been experiencing chest pain occasionally. "
            "Is this something I should be worried about?",
            now - 4 * MS_PER_HOUR,
        ),
        _msg(
            "msg_007",
            "conv_003",
            SEED_DOCTOR_ID,
            Party.DOCTOR,
            "Thank you for reaching out. Chest pain can have many causes. Can you describe "
            "the pain? Is it sharp or dull? Does it occur during physical activity?",
            now - 3 * MS_PER_HOUR,
        ),
        _msg(
            "msg_008",
            "conv_003",
            "patient_002",
            Party.PATIENT,
            "It's more of a dull ache. It happens randomly, not really during exercise. "
            "Sometimes when I'm stressed.",
            now - 45 * MS_PER_MINUTE,
        ),
    ]
    return [
        (
            Conversation(
                id="conv_001",
                patient_id=p1,
                patient_name=SEED_PATIENT_NAME,
                doctor_id="doc_002",
                created_at=now - 3 * MS_PER_HOUR,
                updated_at=now - 30 * MS_PER_MINUTE,
            ),
            thread1,
        ),
        (
            Conversation(
                id="conv_002",
                patient_id=p1,
                patient_name=SEED_PATIENT_NAME,
                doctor_id="doc_004",
                created_at=now - 24 * MS_PER_HOUR,
                updated_at=now - 23 * MS_PER_HOUR,
                patient_unread=1,
            ),
            thread2,
        ),
        (
            Conversation(
                id="conv_003",
                patient_id="patient_002",
                patient_name="Emily Johnson",
                doctor_id=SEED_DOCTOR_ID,
                created_at=now - 4 * MS_PER_HOUR,
                updated_at=now - 45 * MS_PER_MINUTE,
                doctor_unread=1,
            ),
            thread3,
        ),
    ]


def seed_demo_data(conn: Connection, *, now: int) -> None:
    """Insert the demo dataset. The caller owns the transaction."""
    conn.execute(
        insert(doctors),
        [doctor_to_row(doctor, position) for position, doctor in enumerate(DEMO_DOCTORS)],
    )
    conn.execute(insert(entitlements).values(**entitlement_to_row(_seed_boost(now))))
    for conversation, thread in _seed_threads(now):
        conn.execute(insert(conversations).values(**conversation_to_row(conversation)))
        conn.execute(insert(messages), [message_to_row(m) for m in thread])
