"""Database engine setup for the careride store.

SQLite is the simulated backend. File-backed databases use WAL mode;
``db_path=None`` gives a private in-memory database shared by every
connection of the engine (StaticPool), which is what tests and library
callers use.

SQLAlchemy Core (not ORM) is used: records are frozen domain models,
so there is no identity map to maintain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from careride.infrastructure.database.schema import doctors, metadata


def create_db_engine(db_path: Path | None) -> Engine:
    """Create a SQLite engine with foreign keys enabled."""
    if db_path is None:
        engine = create_engine(
            "sqlite://",
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        if db_path is not None:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(db_path: Path | None, *, seed: bool = True, now: int = 0) -> Engine:
    """Create (or open) the store and all tables.

    Seeds the demo dataset once, when *seed* is set and the doctors
    table is empty. Seed timestamps are relative to *now*.

    Idempotent — safe to call on an existing database.
    """
    if db_path is not None:
        db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(db_path)
    metadata.create_all(engine)

    if seed:
        from careride.infrastructure.seed import seed_demo_data

        with engine.begin() as conn:
            count = conn.execute(select(func.count()).select_from(doctors)).scalar_one()
            if count == 0:
                seed_demo_data(conn, now=now)
    return engine
