"""Store — the simulated backend shared by every service.

The Store owns the SQLAlchemy engine, the clock and the read
repositories. Writes go through :meth:`Store.transaction`, which yields
a :class:`StoreTransaction` bound to one ``engine.begin()`` connection:
all writes in the block commit together or roll back together.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import insert, update

from careride.infrastructure.database.counters import next_sequential_id
from careride.infrastructure.database.engine import init_database
from careride.infrastructure.database.schema import (
    conversations,
    doctors,
    entitlements,
    messages,
)
from careride.infrastructure.repositories import (
    DoctorRepository,
    EntitlementRepository,
    MessageRepository,
)
from careride.infrastructure.repositories.rows import (
    conversation_to_row,
    doctor_to_row,
    entitlement_to_row,
    message_to_row,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from careride.config.settings import CareSettings
    from careride.domain.models import Conversation, Doctor, EntitlementRecord, Message

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def system_clock() -> int:
    """Current UTC time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass
class StoreTransaction:
    """Active write transaction. IDs claimed here share its fate."""

    conn: Connection

    def next_id(self, prefix: str) -> str:
        return next_sequential_id(self.conn, prefix)

    def update_doctor(self, doctor: Doctor) -> None:
        """Overwrite a listing in place; its listing position is kept."""
        row = doctor_to_row(doctor)
        self.conn.execute(update(doctors).where(doctors.c.id == doctor.id).values(**row))

    def insert_entitlement(self, record: EntitlementRecord) -> None:
        self.conn.execute(insert(entitlements).values(**entitlement_to_row(record)))

    def update_entitlement(self, record: EntitlementRecord) -> None:
        row = entitlement_to_row(record)
        self.conn.execute(update(entitlements).where(entitlements.c.id == record.id).values(**row))

    def insert_conversation(self, conversation: Conversation) -> None:
        self.conn.execute(insert(conversations).values(**conversation_to_row(conversation)))

    def update_conversation(self, conversation: Conversation) -> None:
        row = conversation_to_row(conversation)
        self.conn.execute(
            update(conversations).where(conversations.c.id == conversation.id).values(**row)
        )

    def insert_message(self, message: Message) -> None:
        self.conn.execute(insert(messages).values(**message_to_row(message)))


class Store:
    """Repository facade over the simulated backend.

    Constructed once from :class:`CareSettings`; services receive it via
    their :class:`BaseService` constructor. Pass *clock* to control time
    (tests, replays); it defaults to the system clock.
    """

    def __init__(self, settings: CareSettings, *, clock: Clock | None = None) -> None:
        self._settings = settings
        self._clock: Clock = clock or system_clock
        self._engine: Engine = init_database(
            settings.db_path,
            seed=settings.store.seed,
            now=self._clock(),
        )
        self.doctors = DoctorRepository(self._engine)
        self.entitlements = EntitlementRepository(self._engine)
        self.messages = MessageRepository(self._engine)
        logger.debug("Store opened at %s", settings.db_path or ":memory:")

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def settings(self) -> CareSettings:
        return self._settings

    def now(self) -> int:
        """Current time in epoch milliseconds, from the injected clock."""
        return self._clock()

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Atomic write block (commit on success, rollback on exception).

        Usage::

            with store.transaction() as txn:
                txn.insert_entitlement(record)
        """
        with self._engine.begin() as conn:
            yield StoreTransaction(conn=conn)

    def close(self) -> None:
        self._engine.dispose()
