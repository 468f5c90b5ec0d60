"""Initialize database tables."""
from sqlmodel import SQLModel
from app.models.task import Task  # noqa: F401
from app.models.reset_log import TaskResetLog  # noqa: F401
from app.db.config import engine
import logging

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create all tables in the database."""
    logger.info("[DB INIT] Creating all tables...")
    SQLModel.metadata.create_all(bind or engine)
    logger.info("[DB INIT] Tables created successfully.")


if __name__ == "__main__":
    init_db()
    print("Database tables created successfully.")
