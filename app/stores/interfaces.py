"""Store interfaces (repository pattern).

Services depend only on these interfaces. The SQLModel implementation lives
in ``app.stores.sql``; tests run it against an in-memory SQLite database.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from app.models import Event, User


class UserStore(ABC):
    """Interface for user persistence operations."""

    @abstractmethod
    def get_user(self, user_id: UUID) -> User | None:
        """Return a user by ID, or None if not found."""
        ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> User | None:
        """Return the user with exactly this email, or None."""
        ...

    @abstractmethod
    def count_users(self) -> int:
        """Return the number of registered users."""
        ...

    @abstractmethod
    def add_user(self, user: User) -> User:
        """Persist a new user and return it with generated fields loaded.

        Raises:
            Conflict: If another user already has this email.
        """
        ...


class EventStore(ABC):
    """Interface for event aggregate persistence.

    An aggregate is an Event with its guests and tasks. ``save_event``
    writes the whole aggregate as one unit.
    """

    @abstractmethod
    def get_event(self, event_id: UUID) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def list_events_for_owner(self, user_id: UUID) -> list[Event]:
        """Return events owned by ``user_id``, oldest first."""
        ...

    @abstractmethod
    def list_events_for_guest_email(self, email: str) -> list[Event]:
        """Return events with at least one guest using ``email``, oldest first."""
        ...

    @abstractmethod
    def save_event(self, event: Event) -> Event:
        """Insert or update an event aggregate and return it refreshed."""
        ...

    @abstractmethod
    def delete_event(self, event: Event) -> None:
        """Delete an event together with its guests and tasks."""
        ...
