"""SQLite engine, sessions and key/value access for the settings store."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Mapping

from sqlalchemy import create_engine, select
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from campmeals.config import get_settings
from campmeals.db.models import Base, SettingORM

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None
logger = logging.getLogger(__name__)


def _open_database(db_path: Path) -> Engine:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(URL.create("sqlite", database=str(db_path)), future=True)
    try:
        Base.metadata.create_all(engine)
    except OperationalError as exc:
        # Another process created the table first.
        if "already exists" not in str(exc).lower():
            raise
        logger.debug("Settings schema already present: %s", exc)
    logger.debug("Opened settings database at %s", db_path)
    return engine


def get_engine(database_path: Path | None = None) -> Engine:
    """Return the shared engine, opening the configured database on first use."""
    global _engine, _session_factory

    if _engine is None:
        _engine = _open_database(database_path or get_settings().database_path)
        _session_factory = sessionmaker(bind=_engine, autoflush=False, future=True)
    return _engine


def get_session() -> Session:
    if _session_factory is None:
        get_engine()
    assert _session_factory is not None  # for mypy
    return _session_factory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Context manager yielding a session with automatic commit/rollback."""
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def read_settings(prefix: str) -> dict[str, str]:
    """Return stored values whose key starts with ``prefix``, keyed without it."""

    with session_scope() as session:
        query = select(SettingORM).where(SettingORM.key.startswith(prefix, autoescape=True))
        rows = session.execute(query).scalars().all()
        return {row.key[len(prefix):]: row.value for row in rows}


def write_settings(prefix: str, values: Mapping[str, str]) -> None:
    """Insert or replace ``prefix + key`` for every entry in one transaction."""

    with session_scope() as session:
        for key, value in values.items():
            session.merge(SettingORM(key=prefix + key, value=value))


def reset_repository_state() -> None:
    """Drop the cached engine so the next call reopens the configured database (tests)."""

    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


__all__ = [
    "get_engine",
    "get_session",
    "read_settings",
    "reset_repository_state",
    "session_scope",
    "write_settings",
]
