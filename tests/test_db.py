"""Engine construction for server and SQLite URLs."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from addrbook import db
from addrbook.config import settings
from addrbook.models.contact import Phone, PhoneType


def test_server_engine_uses_pool_settings():
    engine = db.get_engine("postgresql+psycopg://addrbook@localhost:5432/addrbook")
    try:
        assert engine.pool.size() == settings.db_pool_size
        assert engine.pool.timeout() == settings.db_pool_timeout
    finally:
        engine.dispose()


def test_session_factory_is_bound_to_module_engine():
    assert db.SessionLocal.kw["bind"] is db.engine


def test_sqlite_engine_turns_foreign_keys_on():
    engine = db.get_engine("sqlite+pysqlite://", poolclass=StaticPool)
    try:
        with engine.connect() as connection:
            assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1
    finally:
        engine.dispose()


def test_child_row_without_party_is_refused(db_session, tenant):
    db_session.add(
        Phone(
            mservice_id=tenant,
            party_id=4242,
            phone_type=PhoneType.home,
            phone_number="415-555-1234",
        )
    )
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()
