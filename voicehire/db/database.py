"""
Database engine and session management for VoiceHire
"""

import logging
from collections.abc import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from voicehire.config.settings import get_settings
from voicehire.db.models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def create_db_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine; SQLite connections get foreign keys enabled."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_engine(database_url, echo=echo, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema initialized")


def get_engine() -> Engine:
    """Get the application engine, creating it and the schema on first use."""
    global _engine, _SessionLocal

    if _engine is None:
        settings = get_settings()
        _engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)
        init_db(_engine)

    return _engine


def get_db() -> Iterator[Session]:
    """Request-scoped database session."""
    get_engine()
    with _SessionLocal() as session:
        yield session


def dispose_engine() -> None:
    """Release pooled connections on shutdown."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
