"""
Database connection and session management module.

Uses SQLAlchemy for ORM operations. Supports PostgreSQL (production/Docker)
and SQLite (local development and tests).

The engine and session factory are built from Settings by create_app() and
kept on app.state; get_db() hands one session per request to the routes.
"""

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def build_engine(database_url: str) -> Engine:
    """
    Create an engine with options suited to the database type.

    SQLite does not support pool_size, max_overflow, or pool_pre_ping.
    An in-memory SQLite database is pinned to one connection so every
    session sees the same data.
    """
    engine_kwargs = {"echo": False}

    if database_url.startswith("postgresql"):
        engine_kwargs.update({
            "pool_size": 10,
            "max_overflow": 20,
            "pool_pre_ping": True,
        })
    elif database_url.startswith("sqlite"):
        # SQLite needs check_same_thread=False for FastAPI (multi-threaded)
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(database_url):
            engine_kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **engine_kwargs)

    if database_url.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            if not _is_memory_sqlite(database_url):
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory - creates new database sessions bound to engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(engine: Engine):
    """
    Create all database tables directly (used for SQLite).
    For PostgreSQL, use Alembic migrations instead.
    """
    # Import all models so they are registered with Base.metadata
    import slat.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    """
    FastAPI dependency that provides a database session.

    Yields a session from the application's session factory and ensures
    it is closed after the request, even if an exception occurs.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
