"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("dailydiet.database")

# Create SQLAlchemy Base
Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections are shared across FastAPI's worker threads, and an
    in-memory SQLite database must live on a single connection or every
    new connection would see an empty database.
    """
    url = make_url(database_url)
    kwargs = {"echo": echo, "future": True}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


# Create engine
engine = build_engine(settings.database_url, echo=settings.db_echo)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)


def init_database(bind: Engine = None):
    """Create the meals table and its session index if missing"""
    # Import models so they register on Base.metadata
    import domain.models.meal  # noqa: F401

    target = bind or engine
    with target.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def drop_database(bind: Engine = None):
    """Drop all tables owned by this application"""
    import domain.models.meal  # noqa: F401

    target = bind or engine
    with target.begin() as conn:
        Base.metadata.drop_all(bind=conn)
    logger.info("Database tables dropped")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
