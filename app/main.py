"""Main FastAPI application for the recurring task service."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from app.db.init import init_db
from app.middleware.cors import add_cors_middleware
from app.routers import reset_router, tasks_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    try:
        init_db()
    except Exception as e:
        # The API still starts; database calls will fail until it is reachable
        logger.warning(f"Database initialization failed: {str(e)}")
    yield


app = FastAPI(
    title="Recurring Tasks API",
    description="Recurring task scheduling and the daily reset job",
    version=VERSION,
    lifespan=lifespan,
)

add_cors_middleware(app)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


app.include_router(tasks_router, prefix="/api")  # Task endpoints: /api/{user_id}/tasks
app.include_router(reset_router, prefix="/api")  # Reset endpoints: /api/reset-tasks


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
