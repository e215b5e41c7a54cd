"""Database configuration and session management for SQLite.

The record store keeps one row per event and one row per user. SQLite is
configured the same way for every connection:

    - **WAL (Write-Ahead Logging)**: readers are not blocked while an event
      is being created, so the dashboard list can refresh during a write.

    - **busy_timeout**: a writer waits up to five seconds for a lock instead
      of failing at once when two events are created together.

    - **check_same_thread=False**: FastAPI may hand a session created in one
      thread to a handler running in another.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from eventshare.core.config import settings

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
