"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine for the embedded
SQLite database and provides small helpers used by the application and
tests. By default the database lives in memory for the lifetime of the
process; set `DATABASE_URL` (e.g. `sqlite:///appli.db`) to keep a file.
"""

from sqlalchemy import text
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from .config import settings


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def build_engine(url: str, echo: bool = False):
    """Create an engine for `url`.

    SQLite connections are shared across threads; an in-memory database
    uses a single static connection so every session sees the same data.
    """
    kwargs = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)


def create_db_and_tables():
    """Create database tables using SQLModel metadata.

    No tables are declared yet; the call keeps the persistence layer wired
    so that models added later are created at startup.
    """
    SQLModel.metadata.create_all(engine)


def ping() -> bool:
    """Run a trivial query against the database."""
    with engine.connect() as conn:
        return conn.execute(text("SELECT 1")).scalar() == 1


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
