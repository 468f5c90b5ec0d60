"""Response schemas for the reset trigger."""
from pydantic import BaseModel
from typing import Any, Dict, List


class ResetSummaryResponse(BaseModel):
    """Outcome of one reset run."""
    success: bool
    updated_count: int
    tasks_checked: int
    date: str
    message: str
    errors: List[str] = []
    interrupted: bool = False


class ResetStatusResponse(BaseModel):
    """Read-only health view of the reset job."""
    tasks_to_reset: int
    current_date: str
    reset_executed_today: bool
    message: str
    metrics: Dict[str, Any]
