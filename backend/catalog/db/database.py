"""
Engine and session management.

SQLite (the default) gets a single shared connection in WAL mode; any other
URL gets a pre-pinged connection pool sized from settings.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterator
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from catalog.core.config import settings
from catalog.db.models import Base

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parents[2]


def resolve_sqlite_url(url: str) -> str:
    """Anchor `sqlite:///./file.db` at backend/ so the CWD does not matter."""
    prefix = "sqlite:///./"
    if url.startswith(prefix):
        return f"sqlite:///{BACKEND_DIR / url[len(prefix):]}"
    return url


def _enable_wal(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            resolve_sqlite_url(url),
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(sqlite_engine, "connect", _enable_wal)
        return sqlite_engine

    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_recycle=settings.database_pool_recycle,
        pool_pre_ping=settings.database_pool_pre_ping,
        pool_timeout=30,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for scripts and startup hooks; rolled back on error."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create missing tables."""
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ready ({engine.url.get_backend_name()})")
