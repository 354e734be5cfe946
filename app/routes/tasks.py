"""Task routes for managing an event's preparation tasks."""
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.dependencies import get_current_user, get_event_service
from app.models import User
from app.models.task import TaskCreate, TaskRead
from app.services.events import EventService

router = APIRouter(prefix="/events/{event_id}/tasks", tags=["tasks"])


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def add_task(
    event_id: UUID,
    payload: TaskCreate,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """Add a task to the event. New tasks start not completed."""
    return events.add_task(event_id, user, payload.description)


@router.patch("/{task_id}/toggle", status_code=status.HTTP_204_NO_CONTENT)
def toggle_task(
    event_id: UUID,
    task_id: UUID,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """
    Toggle a task's completed state.

    Flips the flag; calling it twice restores the original state.
    """
    events.toggle_task(event_id, task_id, user)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    event_id: UUID,
    task_id: UUID,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    events.delete_task(event_id, task_id, user)
