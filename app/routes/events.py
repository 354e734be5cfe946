"""Event routes for creating, editing, publishing and registering for events."""
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.dependencies import get_current_user, get_event_service
from app.models import User
from app.models.event import EventCreate, EventRead, EventUpdate, ScrapedEventRegistration
from app.models.guest import GuestCreate, GuestRead
from app.services.events import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[EventRead])
def list_events(
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """List the current user's own events in creation order."""
    return events.list_for_owner(user)


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """
    Create an event owned by the current user.

    Requires name, date, time and location. Tasks and guests may be passed
    along; otherwise the event starts with empty lists.
    """
    return events.create(user, payload)


@router.get("/public/{event_id}", response_model=EventRead)
def get_public_event(
    event_id: UUID,
    events: EventService = Depends(get_event_service),
):
    """
    Show a public event without authentication.

    Private events answer 404 exactly like missing ones.
    """
    return events.get_public(event_id)


@router.post(
    "/public/{event_id}/register",
    response_model=GuestRead,
    status_code=status.HTTP_201_CREATED,
)
def register_for_public_event(
    event_id: UUID,
    payload: GuestCreate,
    events: EventService = Depends(get_event_service),
):
    """
    Self-register for a public event.

    The new guest is marked Attending. Returns 400 if the email is already
    registered and 404 if the event is missing or private.
    """
    return events.public_register(event_id, payload.name, payload.email)


@router.post(
    "/register-scraped",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
)
def register_for_scraped_event(
    payload: ScrapedEventRegistration,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """
    Save a discovered event to the current user's calendar.

    Creates a private event at 12:00 with the user as its only, attending,
    guest.
    """
    return events.register_scraped(user, payload)


@router.put("/{event_id}", response_model=EventRead)
def update_event(
    event_id: UUID,
    payload: EventUpdate,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """
    Partially update an event.

    Only fields present in the body change. Only the owner may update.
    """
    return events.update(event_id, user, payload)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: UUID,
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """Delete an event with its guests and tasks. Only the owner may delete."""
    events.delete(event_id, user)
