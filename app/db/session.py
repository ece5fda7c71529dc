# ============================================================================
# FILE: app/db/session.py
# ============================================================================
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from app.config import settings
import os
import logging

logger = logging.getLogger(__name__)

def _connect_args(url: str) -> dict:
    # SQLite connections are shared across the threadpool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}

def ensure_sqlite_directory(url: str) -> None:
    """Create the directory holding a SQLite database file if it is missing"""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database
    if not database or database == ":memory:":
        return
    directory = os.path.dirname(os.path.abspath(database))
    if not os.path.isdir(directory):
        os.makedirs(directory, exist_ok=True)
        logger.info(f"Created database directory: {directory}")

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one database session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db() -> None:
    """Create tables on startup"""
    # Import models so they register on Base.metadata
    from app.db.base import Base
    from app.db.models import user, playlist  # noqa: F401

    ensure_sqlite_directory(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
