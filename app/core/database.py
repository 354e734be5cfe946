"""Database configuration and session management.

Events are stored as aggregates: the ``event`` row plus its ``guest`` and
``task`` rows, which have no lifecycle of their own. Every mutation loads
the aggregate, changes it in memory and commits it in one unit of work.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: Allows concurrent readers while writing.
      Request handlers read events while other requests commit changes.

    - **Foreign Keys**: SQLite has foreign key support but it's disabled by
      default for backwards compatibility. We enable it so that deleting an
      Event cascades to its Guests and Tasks at the database level too.

    - **check_same_thread=False**: Required for FastAPI. Sync path operations
      run in a threadpool, so a session may be used on a different thread
      than the one that opened its connection.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings

is_sqlite = settings.database_url.startswith("sqlite")
connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if is_sqlite:
    sa_event.listen(engine, "connect", set_sqlite_pragma)


def create_db_and_tables():
    """Create all database tables."""
    # Import for side effects: registers the tables on SQLModel.metadata
    import app.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
