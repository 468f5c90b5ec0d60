"""Best-effort persistence of reset run summaries."""
from datetime import date
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.models.reset_log import TaskResetLog
from app.models.task import utc_now
from app.services.reset_executor import ExecutionLogger, ExecutionSummary
from app.utils.logger import get_logger

logger = get_logger("task-reset-log")


class SQLModelExecutionLogger(ExecutionLogger):
    """Writes one task_reset_logs row per run."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def record(self, summary: ExecutionSummary) -> None:
        log = TaskResetLog(
            executed_at=utc_now(),
            run_date=summary.date,
            updated_count=summary.updated_count,
            success=summary.success,
            message=summary.message[:500],
            error_count=len(summary.errors),
        )
        with Session(self.engine) as session:
            session.add(log)
            session.commit()


def was_reset_executed_today(engine: Engine, today: Optional[date] = None) -> bool:
    """
    Check whether a successful reset was already logged for `today`.

    A missing table or any database error answers False so the caller
    simply runs the reset again, which is safe.
    """
    today = today or date.today()
    try:
        with Session(engine) as session:
            statement = select(TaskResetLog).where(
                TaskResetLog.run_date == today.isoformat(),
                TaskResetLog.success == True,  # noqa: E712
            )
            return session.exec(statement).first() is not None
    except SQLAlchemyError as e:
        logger.warning("Could not read reset log", error=str(e))
        return False
