"""Tests for sequential ID generation."""

from collections.abc import Iterator

import pytest
from sqlalchemy.engine import Engine

from careride.infrastructure.database.counters import next_sequential_id
from careride.infrastructure.database.engine import init_database


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    engine = init_database(None, seed=False)
    try:
        yield engine
    finally:
        engine.dispose()


class TestNextSequentialId:
    def test_first_id(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            assert next_sequential_id(conn, "sub_") == "sub_0001"

    def test_sequential_increment(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            ids = [next_sequential_id(conn, "msg_") for _ in range(3)]
        assert ids == ["msg_0001", "msg_0002", "msg_0003"]

    def test_independent_counters(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            sub1 = next_sequential_id(conn, "sub_")
            boost1 = next_sequential_id(conn, "boost_")
            sub2 = next_sequential_id(conn, "sub_")
        assert (sub1, boost1, sub2) == ("sub_0001", "boost_0001", "sub_0002")

    def test_persists_across_transactions(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            next_sequential_id(conn, "conv_")
        with db_engine.begin() as conn:
            assert next_sequential_id(conn, "conv_") == "conv_0002"

    def test_rollback_releases_id(self, db_engine: Engine) -> None:
        with pytest.raises(RuntimeError):
            with db_engine.begin() as conn:
                next_sequential_id(conn, "sub_")
                raise RuntimeError("abort")
        with db_engine.begin() as conn:
            assert next_sequential_id(conn, "sub_") == "sub_0001"

    def test_invalid_prefix_raises(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            with pytest.raises(ValueError, match="Unknown ID prefix"):
                next_sequential_id(conn, "note_")
