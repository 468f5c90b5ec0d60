"""
Task Store

Read due tasks and write reset state. The executor only depends on the
TaskStore interface; SQLModelTaskStore is the database-backed implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional
import logging

from sqlalchemy import func, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.models.recurrence_rule import RecurrenceRule
from app.models.task import Task, TaskState, utc_now

logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Raised when the store cannot write a reset; the message carries the cause."""


class ApplyResult(str, Enum):
    """Outcome of a conditional reset write."""
    SUCCESS = "success"
    CONFLICT = "conflict"  # task was no longer completed when written
    ERROR = "error"


@dataclass(frozen=True)
class TaskSnapshot:
    """Read-only copy of the fields the executor needs from a due task."""
    id: int
    title: str
    due_date: Optional[date]
    repeat_unit: Optional[str]
    repeat_interval: int = 1
    repeat_days: List[str] = field(default_factory=list)
    remaining_occurrences: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskSnapshot":
        return cls(
            id=task.id,
            title=task.title,
            due_date=task.due_date,
            repeat_unit=task.repeat_unit,
            repeat_interval=task.repeat_interval or 1,
            repeat_days=list(task.repeat_days or []),
            remaining_occurrences=task.remaining_occurrences,
            start_date=task.start_date,
            end_date=task.end_date,
        )

    def recurrence_rule(self, anchor_date: Optional[date], remaining_occurrences: Optional[int]) -> RecurrenceRule:
        """Build the rule for a recompute; raises ValidationError on malformed stored data."""
        return RecurrenceRule(
            unit=self.repeat_unit,
            interval=self.repeat_interval,
            weekdays=self.repeat_days,
            anchor_date=anchor_date,
            remaining_occurrences=remaining_occurrences,
        )


class TaskStore(ABC):
    """Persistence contract consumed by the reset executor."""

    @abstractmethod
    def find_due_tasks(self) -> List[TaskSnapshot]:
        """Return tasks with repeats=True, a due date, and state completed."""

    @abstractmethod
    def apply_reset(
        self,
        task_id: int,
        new_state: TaskState,
        new_remaining_occurrences: Optional[int],
        new_due_date: Optional[date],
    ) -> ApplyResult:
        """
        Write the reset, conditioned on the task still being completed.

        Stores that can explain a failed write raise TaskStoreError instead
        of returning ERROR.
        """

    @abstractmethod
    def count_due_tasks(self) -> int:
        """Count tasks matching the due predicate without changing anything."""


def _due_predicate():
    return (
        Task.repeats == True,  # noqa: E712
        Task.due_date.is_not(None),
        Task.state == TaskState.COMPLETED,
    )


class SQLModelTaskStore(TaskStore):
    """TaskStore backed by the task table. Every call runs in its own transaction."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def find_due_tasks(self) -> List[TaskSnapshot]:
        with Session(self.engine) as session:
            tasks = session.exec(select(Task).where(*_due_predicate())).all()
            return [TaskSnapshot.from_task(task) for task in tasks]

    def apply_reset(
        self,
        task_id: int,
        new_state: TaskState,
        new_remaining_occurrences: Optional[int],
        new_due_date: Optional[date],
    ) -> ApplyResult:
        statement = (
            update(Task)
            .where(Task.id == task_id, Task.state == TaskState.COMPLETED)
            .values(
                state=new_state,
                remaining_occurrences=new_remaining_occurrences,
                due_date=new_due_date,
                updated_at=utc_now(),
            )
        )
        try:
            with self.engine.begin() as connection:
                result = connection.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Failed to reset task {task_id}: {str(e)}")
            raise TaskStoreError(f"database rejected the update: {e}") from e

        if result.rowcount == 0:
            logger.warning(f"Task {task_id} is no longer completed; reset skipped")
            return ApplyResult.CONFLICT
        return ApplyResult.SUCCESS

    def count_due_tasks(self) -> int:
        with Session(self.engine) as session:
            statement = select(func.count()).select_from(Task).where(*_due_predicate())
            return session.exec(statement).one()
