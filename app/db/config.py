"""Database configuration for the recurring task service."""
from typing import Generator
from sqlmodel import create_engine, Session
import os
import logging
from dotenv import load_dotenv
from sqlalchemy import event

# Load environment variables from .env if present
load_dotenv()

logger = logging.getLogger(__name__)

# Use the DATABASE_URL from environment variable, with fallback to SQLite for local dev
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./recurring_tasks.db")
IS_SQLITE = DATABASE_URL.startswith("sqlite")

if IS_SQLITE:
    logger.info(f"[DB CONFIG] Using SQLite database: {DATABASE_URL}")
else:
    logger.info("[DB CONFIG] Using PostgreSQL database")

# SQLite connections are shared across the threadpool FastAPI runs sync routes in
connect_args = {"check_same_thread": False} if IS_SQLITE else {}

engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)

if IS_SQLITE:
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


def get_engine():
    """Dependency returning the process-wide engine."""
    return engine


def get_session() -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session
