from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from mikan_assist.models import Base
from mikan_assist.settings import settings

_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def use_engine(engine: Engine) -> Engine:
    """Bind the session factory to an already-built engine (tests pass an in-memory one)."""
    global _engine, _SessionLocal

    _engine = engine
    _SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    return engine


def init_engine(database_url: str | None = None) -> Engine:
    url = database_url or settings.database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return use_engine(create_engine(url, future=True, connect_args=connect_args))


def get_engine() -> Engine:
    if _engine is None:
        init_engine()
    assert _engine is not None
    return _engine


def create_tables() -> Engine:
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    return engine


def get_session() -> Generator[Session, None, None]:
    if _SessionLocal is None:
        init_engine()
    assert _SessionLocal is not None
    db = _SessionLocal()
    try:
        yield db
    finally:
        db.close()
