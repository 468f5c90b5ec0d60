"""Task schemas for recurring task management."""
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional, List

from app.models.task import TaskState


class TaskCreate(BaseModel):
    """Schema for creating a task, optionally recurring."""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    repeats: bool = False
    repeat_unit: Optional[str] = Field(None, pattern=r"^(day|week|month|year)$")
    repeat_interval: int = Field(default=1, ge=1)  # every N units
    repeat_days: Optional[List[str]] = Field(None, max_length=7)  # weekday names for weekly recurrence
    remaining_occurrences: Optional[int] = None  # None = unlimited
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TaskUpdate(BaseModel):
    """Schema for editing a task. Omitted fields are left unchanged."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    repeats: Optional[bool] = None
    repeat_unit: Optional[str] = Field(None, pattern=r"^(day|week|month|year)$")
    repeat_interval: Optional[int] = Field(None, ge=1)
    repeat_days: Optional[List[str]] = Field(None, max_length=7)
    remaining_occurrences: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TaskResponse(BaseModel):
    """Schema for task API responses."""
    id: int
    user_id: str
    title: str
    description: Optional[str]
    state: TaskState
    created_at: datetime
    updated_at: datetime
    repeats: bool = False
    repeat_unit: Optional[str] = None
    repeat_interval: int = 1
    repeat_days: Optional[List[str]] = None
    remaining_occurrences: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    due_date: Optional[date] = None  # next reset day for recurring tasks

    class Config:
        from_attributes = True
