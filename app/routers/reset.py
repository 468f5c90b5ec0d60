"""Reset trigger router: called once a day by an external scheduler."""
from fastapi import APIRouter, Depends, Response, status
from datetime import date
from typing import Optional
import os

from app.db.config import get_engine
from app.middleware.cron_auth import verify_cron_secret
from app.schemas.reset import ResetStatusResponse, ResetSummaryResponse
from app.services.execution_logger import SQLModelExecutionLogger, was_reset_executed_today
from app.services.reset_executor import ResetExecutor
from app.services.task_store import SQLModelTaskStore
from app.utils.metrics import metrics_collector

router = APIRouter(tags=["Reset"])  # No prefix since main.py adds /api prefix


def get_reset_timeout() -> Optional[float]:
    """Deadline in seconds for HTTP-triggered runs, from RESET_TIMEOUT_SECONDS."""
    value = os.environ.get("RESET_TIMEOUT_SECONDS")
    return float(value) if value else None


def get_reset_executor(engine=Depends(get_engine)) -> ResetExecutor:
    """Dependency for getting a ResetExecutor wired to the database."""
    return ResetExecutor(SQLModelTaskStore(engine), SQLModelExecutionLogger(engine))


def _run_reset(executor: ResetExecutor, response: Response) -> ResetSummaryResponse:
    summary = executor.run(timeout=get_reset_timeout())
    if not summary.success:
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return ResetSummaryResponse(**summary.to_dict())


@router.post(
    "/reset-tasks",
    response_model=ResetSummaryResponse,
    dependencies=[Depends(verify_cron_secret)],
)
def trigger_reset(response: Response, executor: ResetExecutor = Depends(get_reset_executor)):
    """Reset every completed recurring task due today."""
    return _run_reset(executor, response)


@router.get("/reset-tasks", response_model=ResetStatusResponse)
def reset_status(engine=Depends(get_engine)):
    """Report how many tasks are waiting for a reset. Changes nothing."""
    today = date.today()
    return ResetStatusResponse(
        tasks_to_reset=SQLModelTaskStore(engine).count_due_tasks(),
        current_date=today.isoformat(),
        reset_executed_today=was_reset_executed_today(engine, today),
        message="Reset tasks endpoint is working",
        metrics=metrics_collector.get_metrics(),
    )


# Some schedulers can only send GET requests
@router.api_route(
    "/cron/reset-tasks",
    methods=["GET", "POST"],
    response_model=ResetSummaryResponse,
    dependencies=[Depends(verify_cron_secret)],
)
def cron_reset(response: Response, executor: ResetExecutor = Depends(get_reset_executor)):
    """Scheduler entry point; same behavior as POST /reset-tasks."""
    return _run_reset(executor, response)
