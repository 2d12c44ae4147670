"""Engines and sessions for the library database.

One engine and one sessionmaker per database file, shared by every
request that points at that file.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from medialib.db.schema import Base

DEFAULT_DB_PATH = Path("data/medialib.db")

# Keyed by resolved database path
_engines: dict[str, Engine] = {}
_session_factories: dict[str, sessionmaker] = {}


def _resolve(db_path: Path | None) -> tuple[Path, str]:
    path = Path(db_path) if db_path is not None else DEFAULT_DB_PATH
    return path, str(path.resolve())


def get_engine(db_path: Path | None = None) -> Engine:
    """Return the engine for a library database, creating it on first use.

    The database directory is created alongside the engine. All API
    worker threads share one SQLite connection.
    """
    path, key = _resolve(db_path)
    engine = _engines.get(key)
    if engine is not None:
        return engine

    path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        f"sqlite:///{path}",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _engines[key] = engine
    return engine


def get_session(db_path: Path | None = None) -> Session:
    """Open a session on the library database. The caller closes it."""
    _, key = _resolve(db_path)
    factory = _session_factories.get(key)
    if factory is None:
        factory = sessionmaker(bind=get_engine(db_path))
        _session_factories[key] = factory
    return factory()


def init_db(db_path: Path | None = None) -> None:
    """Create the entries table if it does not exist yet."""
    Base.metadata.create_all(get_engine(db_path))
