"""Read repository for doctor listings."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Engine

from careride.domain.models import Doctor
from careride.domain.types import Specialty
from careride.infrastructure.database.schema import doctors
from careride.infrastructure.repositories.rows import row_to_doctor


class DoctorRepository:
    """Encapsulates SQL for doctor lookups. Lists keep listing order."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list_all(self, *, specialty: Specialty | None = None) -> list[Doctor]:
        stmt = select(doctors).order_by(doctors.c.position)
        if specialty is not None:
            stmt = stmt.where(doctors.c.specialty == str(specialty))
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [row_to_doctor(row) for row in rows]

    def get(self, doctor_id: str) -> Doctor | None:
        stmt = select(doctors).where(doctors.c.id == doctor_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return row_to_doctor(row) if row is not None else None
