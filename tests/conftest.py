"""Shared fixtures: an in-memory database and task factories."""

from datetime import datetime, timezone

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.models.reset_log import TaskResetLog  # noqa: F401
from app.models.task import Task, TaskState
from app.utils.metrics import metrics_collector


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(autouse=True)
def clean_metrics():
    metrics_collector.reset()
    yield
    metrics_collector.reset()


@pytest.fixture
def make_task(engine):
    """Insert a task row and return its id."""

    def _make_task(
        title="Water the plants",
        user_id="user-1",
        state=TaskState.COMPLETED,
        repeats=True,
        repeat_unit="day",
        repeat_interval=1,
        repeat_days=None,
        remaining_occurrences=None,
        start_date=None,
        due_date=None,
    ):
        task = Task(
            user_id=user_id,
            title=title,
            state=state,
            repeats=repeats,
            repeat_unit=repeat_unit,
            repeat_interval=repeat_interval,
            repeat_days=repeat_days,
            remaining_occurrences=remaining_occurrences,
            start_date=start_date,
            due_date=due_date,
            created_at=datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc),
        )
        with Session(engine) as session:
            session.add(task)
            session.commit()
            session.refresh(task)
            return task.id

    return _make_task


@pytest.fixture
def load_task(engine):
    """Read a task back through a new session."""

    def _load_task(task_id):
        with Session(engine) as session:
            return session.get(Task, task_id)

    return _load_task
