"""Task router for recurring task management."""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional

from app.models.task import TaskState
from app.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from app.services.task_service import TaskService, RecurrenceValidationError
from app.middleware.auth import get_current_user, ensure_same_user, CurrentUser
from app.db.config import get_session
from sqlmodel import Session

router = APIRouter(tags=["Tasks"])  # No prefix since main.py adds /api prefix


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    """Dependency for getting TaskService instance."""
    return TaskService(session)


@router.get("/{user_id}/tasks", response_model=List[TaskResponse])
async def list_tasks(
    user_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
    state: Optional[TaskState] = Query(None, description="Filter by state: pending, completed"),
):
    """List tasks for the authenticated user."""
    ensure_same_user(user_id, current_user)
    return service.get_by_user(user_id, state=state)


@router.post("/{user_id}/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    user_id: str,
    task_data: TaskCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Create a task; recurring tasks get their first due date here."""
    ensure_same_user(user_id, current_user)

    try:
        return service.create(user_id=user_id, **task_data.model_dump())
    except RecurrenceValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors
        )


@router.get("/{user_id}/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    user_id: str,
    task_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Get a specific task by ID."""
    ensure_same_user(user_id, current_user)

    task = service.get_by_id(task_id, user_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return task


@router.patch("/{user_id}/tasks/{task_id}/complete", response_model=TaskResponse)
async def toggle_complete(
    user_id: str,
    task_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Toggle task completion status."""
    ensure_same_user(user_id, current_user)

    task = service.toggle_complete(task_id, user_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return task


@router.put("/{user_id}/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    user_id: str,
    task_id: int,
    task_data: TaskUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Edit a task; changing its recurrence recomputes the due date."""
    ensure_same_user(user_id, current_user)

    try:
        task = service.update(task_id, user_id, **task_data.model_dump(exclude_unset=True))
    except RecurrenceValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors
        )
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return task
