"""SQLModel-backed stores."""
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from app.core.errors import Conflict
from app.models import Event, Guest, User
from app.stores.interfaces import EventStore, UserStore


class SQLUserStore(UserStore):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_user(self, user_id: UUID) -> User | None:
        return self._session.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        statement = select(User).where(User.email == email)
        return self._session.exec(statement).first()

    def count_users(self) -> int:
        return self._session.exec(select(func.count()).select_from(User)).one()

    def add_user(self, user: User) -> User:
        self._session.add(user)
        try:
            self._session.commit()
        except IntegrityError as e:
            # Lost a race with another signup for the same email
            self._session.rollback()
            raise Conflict("An account with this email already exists.") from e
        self._session.refresh(user)
        return user


class SQLEventStore(EventStore):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_event(self, event_id: UUID) -> Event | None:
        return self._session.get(Event, event_id)

    def list_events_for_owner(self, user_id: UUID) -> list[Event]:
        statement = (
            select(Event)
            .where(Event.user_id == user_id)
            .order_by(Event.created_at)
        )
        return list(self._session.exec(statement).all())

    def list_events_for_guest_email(self, email: str) -> list[Event]:
        # EXISTS rather than a join so an event with two matching guests
        # is returned once
        has_guest = (
            select(Guest.id)
            .where(Guest.event_id == Event.id)
            .where(Guest.email == email)
            .exists()
        )
        statement = select(Event).where(has_guest).order_by(Event.created_at)
        return list(self._session.exec(statement).all())

    def save_event(self, event: Event) -> Event:
        self._session.add(event)
        self._session.commit()
        self._session.refresh(event)
        return event

    def delete_event(self, event: Event) -> None:
        self._session.delete(event)
        self._session.commit()
