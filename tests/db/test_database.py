"""Unit tests for src/db/database.py"""

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from src.core.config import Settings
from src.db.database import create_db_engine, get_db, session_factory


def test_engine_creates_tables() -> None:
    engine = create_db_engine(Settings(database_url="sqlite:///:memory:"))
    assert "games" in inspect(engine).get_table_names()


def test_get_db_closes_session() -> None:
    engine = create_db_engine(Settings(database_url="sqlite:///:memory:"))
    sessions = get_db(session_factory(engine))
    db = next(sessions)
    assert isinstance(db, Session)
    sessions.close()
    # generator finished: the finally block ran
    assert next(sessions, None) is None
