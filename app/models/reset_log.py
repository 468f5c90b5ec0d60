"""Reset log model for SQLModel."""
from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional

from app.models.task import utc_now


class TaskResetLog(SQLModel, table=True):
    """One row per reset run, written best effort after the run."""

    __tablename__ = "task_reset_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    executed_at: datetime = Field(default_factory=utc_now, index=True)
    run_date: str = Field(max_length=10)  # YYYY-MM-DD the run reset tasks for
    updated_count: int = Field(default=0)
    success: bool = Field(default=True)
    message: str = Field(default="", max_length=500)
    error_count: int = Field(default=0)
