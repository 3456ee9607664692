"""Atomic sequential ID generation for store records.

Uses the ``id_counters`` table inside the caller's transaction so the
counter increment commits or rolls back with the surrounding writes.
Minimum 4 digits, grows naturally past 9999.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update

from careride.infrastructure.database.schema import id_counters

if TYPE_CHECKING:
    from sqlalchemy import Connection

ID_PREFIXES = ("sub_", "boost_", "conv_", "msg_")


def next_sequential_id(conn: Connection, type_prefix: str) -> str:
    """Claim the next sequential ID for *type_prefix*.

    Args:
        conn: Active SQLAlchemy connection (caller owns the transaction).
        type_prefix: One of :data:`ID_PREFIXES`.

    Returns:
        The new ID string (e.g. ``"sub_0001"`` or ``"msg_0042"``).

    Raises:
        ValueError: If *type_prefix* is not a recognized prefix.
    """
    if type_prefix not in ID_PREFIXES:
        msg = f"Unknown ID prefix: {type_prefix!r}. Expected one of {list(ID_PREFIXES)}"
        raise ValueError(msg)

    row = conn.execute(
        select(id_counters.c.next_value).where(id_counters.c.type_prefix == type_prefix)
    ).first()

    if row is None:
        current_value = 1
        conn.execute(insert(id_counters).values(type_prefix=type_prefix, next_value=2))
    else:
        current_value = int(row.next_value)
        conn.execute(
            update(id_counters)
            .where(id_counters.c.type_prefix == type_prefix)
            .values(next_value=current_value + 1)
        )

    return f"{type_prefix}{current_value:04d}"
