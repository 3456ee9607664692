"""Read repository for subscription and boost records."""

from __future__ import annotations

from sqlalchemy import literal_column, select
from sqlalchemy.engine import Engine

from careride.domain.models import EntitlementRecord
from careride.domain.types import EntitlementKind
from careride.infrastructure.database.schema import entitlements
from careride.infrastructure.repositories.rows import row_to_entitlement

# Insertion order; breaks ties between records created in the same millisecond.
_ROWID = literal_column("entitlements.rowid")


class EntitlementRepository:
    """Encapsulates SQL for entitlement lookups.

    An owner's *current* record is its most recently created one.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def current(self, kind: EntitlementKind, owner_id: str) -> EntitlementRecord | None:
        stmt = (
            select(entitlements)
            .where(entitlements.c.kind == str(kind), entitlements.c.owner_id == owner_id)
            .order_by(entitlements.c.created_at.desc(), _ROWID.desc())
            .limit(1)
        )
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return row_to_entitlement(row) if row is not None else None

    def history(self, kind: EntitlementKind, owner_id: str) -> list[EntitlementRecord]:
        """All of an owner's records, newest first."""
        stmt = (
            select(entitlements)
            .where(entitlements.c.kind == str(kind), entitlements.c.owner_id == owner_id)
            .order_by(entitlements.c.created_at.desc(), _ROWID.desc())
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [row_to_entitlement(row) for row in rows]

    def current_by_owner(self, kind: EntitlementKind) -> dict[str, EntitlementRecord]:
        """Map each owner with a record of *kind* to its current record."""
        stmt = (
            select(entitlements)
            .where(entitlements.c.kind == str(kind))
            .order_by(entitlements.c.created_at, _ROWID)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        # Ascending order: later rows overwrite earlier ones.
        return {row["owner_id"]: row_to_entitlement(row) for row in rows}
