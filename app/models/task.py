"""Task model for SQLModel."""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON, String, Text
from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional

from app.models.recurrence_rule import RecurrenceRule


def utc_now() -> datetime:
    """Timezone-aware current time; timestamp columns reject naive values."""
    return datetime.now(timezone.utc)


def local_day(moment: datetime) -> date:
    """Calendar day of `moment` in local time. Naive values are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone().date()


class TaskState(str, Enum):
    """Lifecycle state of a task. Only completed tasks are reset."""
    PENDING = "pending"
    COMPLETED = "completed"


class Task(SQLModel, table=True):
    """Task entity that can recur on a schedule."""

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(sa_column=Column(String, index=True, nullable=False))
    title: str = Field(max_length=200, min_length=1)
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    state: TaskState = Field(default=TaskState.PENDING, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Recurrence
    repeats: bool = Field(default=False, index=True)
    repeat_unit: Optional[str] = Field(default=None, max_length=10)  # day, week, month, year
    repeat_interval: int = Field(default=1)
    repeat_days: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))  # weekday names
    remaining_occurrences: Optional[int] = Field(default=None)  # None = unlimited
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)  # stored, not enforced by the calculator
    due_date: Optional[date] = Field(default=None, index=True)  # next reset day

    def recurrence_rule(self, anchor_date: Optional[date] = None) -> Optional[RecurrenceRule]:
        """
        Build the RecurrenceRule for this task.

        The anchor is `anchor_date` when given, else `start_date`, else the
        local day of the last modification. With none of those the rule has
        no anchor and the calculator starts from its reference date.
        Returns None for non-repeating tasks.
        """
        if not self.repeats or not self.repeat_unit:
            return None

        if anchor_date is None:
            anchor_date = self.start_date
        if anchor_date is None and self.updated_at is not None:
            anchor_date = local_day(self.updated_at)

        return RecurrenceRule(
            unit=self.repeat_unit,
            interval=self.repeat_interval or 1,
            weekdays=self.repeat_days or [],
            anchor_date=anchor_date,
            remaining_occurrences=self.remaining_occurrences,
        )
