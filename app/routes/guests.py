"""Guest routes for managing an event's guest list."""
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.dependencies import get_current_user, get_event_service
from app.models import User
from app.models.guest import GuestCreate, GuestRead, GuestStatusUpdate
from app.services.events import EventService

router = APIRouter(prefix="/events/{event_id}/guests", tags=["guests"])


@router.post("", response_model=GuestRead, status_code=status.HTTP_201_CREATED)
def add_guest(
    event_id: UUID,
    payload: GuestCreate,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """Invite a guest. The guest starts as Pending."""
    return events.add_guest(event_id, user, payload.name, payload.email)


@router.patch("/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_guest_status(
    event_id: UUID,
    guest_id: UUID,
    payload: GuestStatusUpdate,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """
    Set a guest's RSVP status.

    Status must be one of Pending, Attending, Maybe or Declined.
    """
    events.update_guest_status(event_id, guest_id, user, payload.status)


@router.delete("/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_guest(
    event_id: UUID,
    guest_id: UUID,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    events.delete_guest(event_id, guest_id, user)
