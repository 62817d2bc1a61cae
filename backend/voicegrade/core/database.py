"""
SQLite engine, sessions and table creation.

Essays reference schools, teachers and students; result rows reference
essays. Foreign keys are enforced on every connection so a bad reference
fails the write instead of leaving orphans.
"""

from contextlib import contextmanager
from typing import Any, Generator, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from voicegrade.core.config import get_database_path

Base = declarative_base()

_engine = None
_SessionLocal = None


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_sqlite_engine(url: str, **kwargs: Any) -> Engine:
    """
    SQLite engine usable from FastAPI's worker threads, with foreign keys on.

    Extra keyword arguments go to create_engine (tests pass poolclass=StaticPool).
    """
    connect_args = {"check_same_thread": False, **kwargs.pop("connect_args", {})}
    engine = create_engine(url, connect_args=connect_args, echo=False, **kwargs)
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def get_engine() -> Engine:
    """Engine for the configured database file, created on first use."""
    global _engine
    if _engine is None:
        _engine = create_sqlite_engine(
            f"sqlite:///{get_database_path()}",
            connect_args={"timeout": 30},
        )
    return _engine


def get_session_local():
    """Session factory bound to the configured engine."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    db = get_session_local()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for scripts; rolled back on error and always closed."""
    db = get_session_local()()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(engine=None) -> None:
    """
    Create all tables.
    Run once via scripts/init_db.py; the application does not migrate on startup.
    """
    from voicegrade import models  # noqa: F401  (registers every table on Base)

    Base.metadata.create_all(bind=engine or get_engine())


def drop_db(engine=None) -> None:
    """Drop all tables. Tests only."""
    Base.metadata.drop_all(bind=engine or get_engine())
