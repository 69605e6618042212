import os
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from moodtracker.errors import StoreError

logger = logging.getLogger(__name__)

Base = declarative_base()

engine = None
SessionLocal = None


def _engine_args(database_url: str) -> dict:
    # Only use connect_args if we are using SQLite
    engine_args = {}
    if database_url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # in-memory databases need a single shared connection
            engine_args["poolclass"] = StaticPool
    else:
        # Production settings for PostgreSQL
        engine_args.update({
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 1800,
            "pool_pre_ping": True,
        })
    return engine_args


def init_db(database_url: str):
    """Create the engine, check connectivity and create all tables."""
    global engine, SessionLocal

    if database_url.startswith("sqlite:///") and database_url != "sqlite:///:memory:":
        folder = os.path.dirname(database_url[len("sqlite:///"):])
        if folder:
            os.makedirs(folder, exist_ok=True)

    # Import all models so they register with Base.metadata
    from moodtracker.models import User, MoodEntry  # noqa: F401

    try:
        engine = create_engine(database_url, echo=False, **_engine_args(database_url))
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Database connection error: {e}")
        raise StoreError("Could not connect to the database") from e

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    logger.info("Database initialized successfully.")


def get_db():
    """FastAPI dependency: yields a database session and closes it after use."""
    if SessionLocal is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def close_db():
    global engine, SessionLocal
    if engine is not None:
        engine.dispose()
    engine = None
    SessionLocal = None
