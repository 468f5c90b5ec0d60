"""
Reset Executor

Runs once per day: finds every completed recurring task whose due date is
today, flips it back to pending and advances its due date. One bad task
never aborts the batch; only a failed selection fails the run.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Any, Dict, List, Optional
import time

from app.models.task import TaskState
from app.services.recurrence_calculator import DateLike, next_occurrence, to_date
from app.services.task_store import ApplyResult, TaskSnapshot, TaskStore
from app.utils.logger import reset_logger
from app.utils.metrics import metrics_collector


@dataclass
class ExecutionSummary:
    """Result of one reset run."""
    date: str
    success: bool = True
    updated_count: int = 0
    tasks_checked: int = 0
    errors: List[str] = field(default_factory=list)
    message: str = ""
    interrupted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ExecutionLogger(ABC):
    """Audit sink for run summaries. Failures are swallowed by the executor."""

    @abstractmethod
    def record(self, summary: ExecutionSummary) -> None:
        """Persist one summary."""


def decrement_occurrences(remaining: Optional[int]) -> Optional[int]:
    """Decrement a positive occurrence count; None and non-positive values pass through."""
    if isinstance(remaining, int) and remaining > 0:
        return remaining - 1
    return remaining


class ResetExecutor:
    """Orchestrates one batch reset over a TaskStore."""

    def __init__(self, store: TaskStore, execution_logger: Optional[ExecutionLogger] = None):
        self.store = store
        self.execution_logger = execution_logger

    @metrics_collector.time_operation("reset_run_duration_seconds")
    def run(self, today: Optional[DateLike] = None, timeout: Optional[float] = None) -> ExecutionSummary:
        """
        Reset every completed recurring task due on `today`.

        Args:
            today: Day to reset for, defaults to the local current date
            timeout: Optional budget in seconds; checked between tasks

        Returns:
            ExecutionSummary with the partial counts if the run stopped early
        """
        today = to_date(today) if today is not None else date.today()
        summary = ExecutionSummary(date=today.isoformat())
        deadline = time.monotonic() + timeout if timeout is not None else None

        metrics_collector.reset_run()
        reset_logger.info("Starting task reset", date=summary.date)

        try:
            tasks = self.store.find_due_tasks()
        except Exception as e:
            message = f"Task reset failed: could not load due tasks: {str(e)}"
            reset_logger.exception(message, date=summary.date)
            metrics_collector.reset_run_failure()
            summary.success = False
            summary.message = message
            summary.errors.append(message)
            self._record(summary)
            return summary

        summary.tasks_checked = len(tasks)
        reset_logger.info("Loaded completed recurring tasks", date=summary.date, tasks_checked=len(tasks))

        for task in tasks:
            if deadline is not None and time.monotonic() >= deadline:
                summary.interrupted = True
                summary.success = False
                summary.errors.append(
                    f"Task reset interrupted by deadline after {summary.updated_count} tasks were reset"
                )
                metrics_collector.reset_run_failure()
                break

            if task.due_date is None or to_date(task.due_date) != today:
                continue

            error = self._reset_task(task, today)
            if error is None:
                summary.updated_count += 1
                metrics_collector.task_reset()
            else:
                summary.errors.append(error)
                metrics_collector.task_reset_error()

        if summary.interrupted:
            summary.message = f"Task reset interrupted: {summary.updated_count} tasks were reset before the deadline"
        else:
            summary.message = f"{summary.updated_count} tasks were reset successfully"

        reset_logger.info(
            summary.message,
            date=summary.date,
            updated_count=summary.updated_count,
            error_count=len(summary.errors),
        )
        self._record(summary)
        return summary

    def _reset_task(self, task: TaskSnapshot, today: date) -> Optional[str]:
        """Reset a single task. Returns an error message, or None on success."""
        try:
            remaining = decrement_occurrences(task.remaining_occurrences)
            rule = task.recurrence_rule(anchor_date=today, remaining_occurrences=remaining)
            new_due_date = next_occurrence(rule, today)

            result = self.store.apply_reset(task.id, TaskState.PENDING, remaining, new_due_date)
        except Exception as e:
            reset_logger.exception("Error resetting task", task_id=task.id)
            return f"Error resetting task {task.id}: {str(e)}"

        if result == ApplyResult.CONFLICT:
            reset_logger.warning("Task changed before reset was written", task_id=task.id)
            return f"Task {task.id} was modified by another process and was not reset"
        if result != ApplyResult.SUCCESS:
            return f"Error resetting task {task.id}: the store rejected the update"

        reset_logger.info(
            "Task reset",
            task_id=task.id,
            title=task.title,
            remaining_occurrences=remaining,
            next_due_date=new_due_date.isoformat() if new_due_date else None,
        )
        return None

    def _record(self, summary: ExecutionSummary) -> None:
        if self.execution_logger is None:
            return
        try:
            self.execution_logger.record(summary)
        except Exception as e:
            reset_logger.warning("Reset log could not be saved", error=str(e))
