"""Task service: the CRUD glue that schedules the first due date."""
from sqlmodel import Session, select
from typing import List, Optional
from datetime import date

from app.models.task import Task, TaskState, utc_now
from app.services.recurrence_calculator import next_occurrence
from app.services.recurrence_validator import RecurrenceValidator

RECURRENCE_FIELDS = (
    "repeats",
    "repeat_unit",
    "repeat_interval",
    "repeat_days",
    "remaining_occurrences",
    "start_date",
    "end_date",
)
EDITABLE_FIELDS = ("title", "description") + RECURRENCE_FIELDS


class RecurrenceValidationError(ValueError):
    """Raised when a task's recurrence settings are malformed."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class TaskService:
    """Service class for task CRUD operations on recurring tasks."""

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        user_id: str,
        title: str,
        description: Optional[str] = None,
        repeats: bool = False,
        repeat_unit: Optional[str] = None,
        repeat_interval: int = 1,
        repeat_days: Optional[List[str]] = None,
        remaining_occurrences: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> Task:
        """Create a task and, when it repeats, compute its first due date."""
        validation = RecurrenceValidator.validate_task_with_recurrence({
            "repeats": repeats,
            "repeat_unit": repeat_unit,
            "repeat_interval": repeat_interval,
            "repeat_days": repeat_days,
            "remaining_occurrences": remaining_occurrences,
            "start_date": start_date,
            "end_date": end_date,
        })
        if not validation["valid"]:
            raise RecurrenceValidationError(validation["errors"])

        now = utc_now()
        task = Task(
            user_id=user_id,
            title=title,
            description=description,
            state=TaskState.PENDING,
            repeats=repeats,
            repeat_unit=repeat_unit if repeats else None,
            repeat_interval=repeat_interval or 1,
            repeat_days=[day.lower() for day in repeat_days] if repeats and repeat_days else None,
            remaining_occurrences=remaining_occurrences,
            start_date=start_date,
            end_date=end_date,
            created_at=now,
            updated_at=now,
        )
        task.due_date = self._first_due_date(task, today or date.today())

        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    @staticmethod
    def _first_due_date(task: Task, today: date) -> Optional[date]:
        # Without a start date the task was just written, so it anchors on the
        # same local day the schedule is computed from.
        rule = task.recurrence_rule(anchor_date=task.start_date or today)
        if rule is None:
            return None
        return next_occurrence(rule, today)

    def get_by_id(self, task_id: int, user_id: str) -> Optional[Task]:
        """Get a specific task by ID for a user."""
        statement = select(Task).where(Task.id == task_id, Task.user_id == user_id)
        return self.session.exec(statement).first()

    def get_by_user(self, user_id: str, state: Optional[TaskState] = None) -> List[Task]:
        """Get all tasks for a user, optionally filtered by state."""
        statement = select(Task).where(Task.user_id == user_id)
        if state is not None:
            statement = statement.where(Task.state == state)
        statement = statement.order_by(Task.created_at.desc())
        return list(self.session.exec(statement).all())

    def update(
        self,
        task_id: int,
        user_id: str,
        today: Optional[date] = None,
        **changes,
    ) -> Optional[Task]:
        """
        Edit a task, ensuring user ownership.

        Only the fields passed in `changes` are written. When any recurrence
        field changes, the merged rule is validated again and the due date is
        recomputed from the start date, or from today when there is none.
        """
        task = self.get_by_id(task_id, user_id)
        if not task:
            return None

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        merged = {name: changes.get(name, getattr(task, name)) for name in RECURRENCE_FIELDS}
        reschedule = any(name in changes for name in RECURRENCE_FIELDS)
        if reschedule:
            validation = RecurrenceValidator.validate_task_with_recurrence(merged)
            if not validation["valid"]:
                raise RecurrenceValidationError(validation["errors"])

        if "title" in changes and changes["title"] is not None:
            task.title = changes["title"]
        if "description" in changes:
            task.description = changes["description"]

        if reschedule:
            repeats = bool(merged["repeats"])
            repeat_days = merged["repeat_days"]
            task.repeats = repeats
            task.repeat_unit = merged["repeat_unit"] if repeats else None
            task.repeat_interval = merged["repeat_interval"] or 1
            task.repeat_days = [day.lower() for day in repeat_days] if repeats and repeat_days else None
            task.remaining_occurrences = merged["remaining_occurrences"]
            task.start_date = merged["start_date"]
            task.end_date = merged["end_date"]
            task.due_date = self._first_due_date(task, today or date.today())

        task.updated_at = utc_now()
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def toggle_complete(self, task_id: int, user_id: str) -> Optional[Task]:
        """Flip a task between pending and completed. The due date is left alone."""
        task = self.get_by_id(task_id, user_id)
        if not task:
            return None

        task.state = TaskState.PENDING if task.state == TaskState.COMPLETED else TaskState.COMPLETED
        task.updated_at = utc_now()
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task
