"""Recurrence Rule value type embedded in a Task."""
from datetime import date, datetime
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Indexed like date.weekday(): Monday is 0
WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class RecurrenceUnit(str, Enum):
    """Calendar unit a task repeats by."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class RecurrenceRule(BaseModel):
    """How a task repeats: every `interval` units, optionally on given weekdays."""

    model_config = ConfigDict(frozen=True)

    unit: RecurrenceUnit
    interval: int = Field(default=1, ge=1)  # every N units
    weekdays: FrozenSet[str] = Field(default_factory=frozenset)  # only used when unit is week
    anchor_date: Optional[date] = None  # None means "the reference date"
    remaining_occurrences: Optional[int] = None  # None = unlimited, <= 0 = exhausted

    @field_validator("weekdays", mode="before")
    @classmethod
    def normalize_weekdays(cls, value):
        if value is None:
            return frozenset()
        names = frozenset(str(day).strip().lower() for day in value)
        unknown = sorted(names - set(WEEKDAY_NAMES))
        if unknown:
            raise ValueError(f"Unknown weekday name(s): {', '.join(unknown)}")
        return names

    @field_validator("anchor_date", mode="before")
    @classmethod
    def strip_time_of_day(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value

    @property
    def is_exhausted(self) -> bool:
        return self.remaining_occurrences is not None and self.remaining_occurrences <= 0
