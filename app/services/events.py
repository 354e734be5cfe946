"""Event aggregate service - all event business logic lives here.

Every mutation follows the same shape: load the aggregate, check existence
and permissions, change it in memory, save it back as one unit.

Permissions:
    - Updating or deleting an event requires being its owner. The admin
      role grants no bypass.
    - Guest and task changes go through a ``SubCollectionPolicy``. The
      default policy lets any signed-in user change them; ``OwnerOnlyPolicy``
      restricts them to the owner.
    - Reading and registering for an event without an account is allowed
      only while the event is public. A private event looks exactly like a
      missing one.
"""
import logging
from uuid import UUID

from app.core.errors import Conflict, Forbidden, NotFound
from app.models import Event, Guest, GuestStatus, Task, User
from app.models.event import (
    DEFAULT_SCRAPED_EVENT_TIME,
    EventCreate,
    EventUpdate,
    ScrapedEventRegistration,
)
from app.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

# Fields an explicit null cannot clear
REQUIRED_EVENT_FIELDS = {"name", "date", "time", "location"}


class SubCollectionPolicy:
    """Decides who may add, change or remove an event's guests and tasks."""

    name = "permissive"

    def check(self, event: Event, actor: User) -> None:
        """Raise ``Forbidden`` if ``actor`` may not touch ``event``'s guests/tasks."""


class OwnerOnlyPolicy(SubCollectionPolicy):
    name = "owner"

    def check(self, event: Event, actor: User) -> None:
        if event.user_id != actor.id:
            raise Forbidden()


POLICIES = {
    SubCollectionPolicy.name: SubCollectionPolicy,
    OwnerOnlyPolicy.name: OwnerOnlyPolicy,
}


def get_policy(name: str) -> SubCollectionPolicy:
    """Return the policy registered under ``name``.

    Raises:
        ValueError: If no policy has that name.
    """
    try:
        return POLICIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown guest/task policy {name!r}; expected one of {sorted(POLICIES)}"
        ) from None


def _require_owner(event: Event, actor: User) -> None:
    if event.user_id != actor.id:
        raise Forbidden()


def _next_position(rows: list) -> int:
    return max((row.position for row in rows), default=-1) + 1


class EventService:
    """Service for event aggregate operations."""

    def __init__(
        self, store: EventStore, policy: SubCollectionPolicy | None = None
    ) -> None:
        self._store = store
        self._policy = policy or SubCollectionPolicy()

    # --- Lookups ---

    def _get(self, event_id: UUID) -> Event:
        event = self._store.get_event(event_id)
        if event is None:
            raise NotFound("Event not found")
        return event

    def _get_guest(self, event: Event, guest_id: UUID) -> Guest:
        for guest in event.guests:
            if guest.id == guest_id:
                return guest
        raise NotFound("Guest not found")

    def _get_task(self, event: Event, task_id: UUID) -> Task:
        for task in event.tasks:
            if task.id == task_id:
                return task
        raise NotFound("Task not found")

    def list_for_owner(self, actor: User) -> list[Event]:
        """Return the actor's own events."""
        return self._store.list_events_for_owner(actor.id)

    def list_for_guest_email(self, email: str) -> list[Event]:
        """Return events that list ``email`` as a guest ("my tickets")."""
        return self._store.list_events_for_guest_email(email)

    # --- Event lifecycle ---

    def create(self, actor: User, data: EventCreate) -> Event:
        """Create an event owned by ``actor``."""
        event = Event(
            name=data.name,
            date=data.date,
            time=data.time,
            location=data.location,
            description=data.description,
            is_public=data.is_public,
            user_id=actor.id,
            user_name=actor.name,
        )
        event.guests = [
            Guest(name=g.name, email=g.email, position=i)
            for i, g in enumerate(data.guests)
        ]
        event.tasks = [
            Task(description=t.description, position=i)
            for i, t in enumerate(data.tasks)
        ]
        event = self._store.save_event(event)
        logger.info(f"User {actor.id} created event {event.id}")
        return event

    def update(self, event_id: UUID, actor: User, data: EventUpdate) -> Event:
        """Apply a partial update.

        Only fields present in the request change. ``isPublic: false`` is
        applied; ``null`` for a required field keeps the prior value.

        Raises:
            NotFound: If the event does not exist.
            Forbidden: If the actor is not the owner.
        """
        event = self._get(event_id)
        _require_owner(event, actor)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field in REQUIRED_EVENT_FIELDS | {"is_public"}:
                continue
            setattr(event, field, value)

        event = self._store.save_event(event)
        logger.info(f"User {actor.id} updated event {event.id}: {sorted(changes)}")
        return event

    def delete(self, event_id: UUID, actor: User) -> None:
        """Delete an event with all its guests and tasks.

        Raises:
            NotFound: If the event does not exist.
            Forbidden: If the actor is not the owner.
        """
        event = self._get(event_id)
        _require_owner(event, actor)
        self._store.delete_event(event)
        logger.info(f"User {actor.id} deleted event {event_id}")

    # --- Public access ---

    def get_public(self, event_id: UUID) -> Event:
        """Return a public event.

        Raises:
            NotFound: If the event does not exist or is private.
        """
        event = self._store.get_event(event_id)
        if event is None or not event.is_public:
            raise NotFound("Public event not found")
        return event

    def public_register(self, event_id: UUID, name: str, email: str) -> Guest:
        """Register someone for a public event as an attending guest.

        Raises:
            NotFound: If the event does not exist or is private.
            Conflict: If the email is already on the guest list.
        """
        event = self._store.get_event(event_id)
        if event is None or not event.is_public:
            raise NotFound("Event not found or is not public")

        if any(guest.email == email for guest in event.guests):
            raise Conflict("This email is already registered for the event.")

        guest = Guest(
            name=name,
            email=email,
            status=GuestStatus.ATTENDING,
            position=_next_position(event.guests),
        )
        event.guests.append(guest)
        self._store.save_event(event)
        logger.info(f"Public registration {guest.id} for event {event_id}")
        return guest

    def register_scraped(self, actor: User, data: ScrapedEventRegistration) -> Event:
        """Turn a scraped event into a private event the actor attends."""
        event = Event(
            name=data.name,
            date=data.date,
            time=DEFAULT_SCRAPED_EVENT_TIME,
            location=data.location,
            description=data.description,
            is_public=False,
            user_id=actor.id,
            user_name=actor.name,
        )
        event.guests = [
            Guest(name=actor.name, email=actor.email, status=GuestStatus.ATTENDING)
        ]
        event.tasks = []
        event = self._store.save_event(event)
        logger.info(f"User {actor.id} registered for scraped event as {event.id}")
        return event

    # --- Guests ---

    def add_guest(self, event_id: UUID, actor: User, name: str, email: str) -> Guest:
        """Invite a guest. New guests start as Pending."""
        event = self._get(event_id)
        self._policy.check(event, actor)

        guest = Guest(name=name, email=email, position=_next_position(event.guests))
        event.guests.append(guest)
        self._store.save_event(event)
        return guest

    def update_guest_status(
        self, event_id: UUID, guest_id: UUID, actor: User, status: GuestStatus
    ) -> Guest:
        """Set a guest's RSVP status.

        Raises:
            NotFound: If the event or the guest does not exist.
        """
        event = self._get(event_id)
        self._policy.check(event, actor)
        guest = self._get_guest(event, guest_id)

        guest.status = status
        self._store.save_event(event)
        return guest

    def delete_guest(self, event_id: UUID, guest_id: UUID, actor: User) -> None:
        event = self._get(event_id)
        self._policy.check(event, actor)
        guest = self._get_guest(event, guest_id)

        event.guests.remove(guest)
        self._store.save_event(event)

    # --- Tasks ---

    def add_task(self, event_id: UUID, actor: User, description: str) -> Task:
        """Add a task. New tasks start not completed."""
        event = self._get(event_id)
        self._policy.check(event, actor)

        task = Task(description=description, position=_next_position(event.tasks))
        event.tasks.append(task)
        self._store.save_event(event)
        return task

    def toggle_task(self, event_id: UUID, task_id: UUID, actor: User) -> Task:
        """Flip a task's completed flag.

        Raises:
            NotFound: If the event or the task does not exist.
        """
        event = self._get(event_id)
        self._policy.check(event, actor)
        task = self._get_task(event, task_id)

        task.completed = not task.completed
        self._store.save_event(event)
        return task

    def delete_task(self, event_id: UUID, task_id: UUID, actor: User) -> None:
        event = self._get(event_id)
        self._policy.check(event, actor)
        task = self._get_task(event, task_id)

        event.tasks.remove(task)
        self._store.save_event(event)
