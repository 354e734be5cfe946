"""Event model, the aggregate root for guests and tasks.

This module defines the Event table and the shapes the API accepts and
returns for it. Events own their Guests and Tasks: both are loaded, changed
and deleted together with the event. JSON payloads use camelCase keys
(``isPublic``, ``userId``, ``userName``); both camelCase and snake_case are
accepted on input.
"""

import datetime as dt
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field as PydanticField, field_validator
from pydantic.alias_generators import to_camel
from sqlmodel import Field, Relationship, SQLModel

from app.models.guest import GuestCreate, GuestRead
from app.models.task import TaskCreate, TaskRead

if TYPE_CHECKING:
    from app.models.guest import Guest
    from app.models.task import Task


DEFAULT_SCRAPED_EVENT_TIME = "12:00"


class Event(SQLModel, table=True):
    """An event planned by one owner.

    Only the owner may edit or delete the event. Public events can be read
    and registered for without an account.

    Attributes:
        id: Unique identifier (UUID).
        name: Event name.
        date: Calendar date of the event (no time component).
        time: Local wall-clock start time, e.g. "18:00".
        location: Free-text location.
        description: Optional longer description.
        is_public: If True, anyone may view the event and register for it.
        user_id: Owner of this event.
        user_name: Owner display name at creation time.
        created_at: When the event was created; listings use this order.
        guests: Invited or registered guests, in insertion order.
        tasks: Preparation tasks, in insertion order.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    date: dt.date
    time: str
    location: str
    description: str | None = None
    is_public: bool = Field(default=False)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    user_name: str
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))

    # Relationships
    guests: list["Guest"] = Relationship(
        back_populates="event",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Guest.position",
        },
    )
    tasks: list["Task"] = Relationship(
        back_populates="event",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Task.position",
        },
    )


class CamelModel(BaseModel):
    """Base for payloads exchanged with the browser client."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class EventRead(CamelModel):
    id: UUID
    name: str
    date: dt.date
    time: str
    location: str
    description: str | None = None
    is_public: bool
    user_id: UUID
    user_name: str
    guests: list[GuestRead] = []
    tasks: list[TaskRead] = []


class EventCreate(CamelModel):
    name: str = PydanticField(min_length=1)
    date: dt.date
    time: str = PydanticField(min_length=1)
    location: str = PydanticField(min_length=1)
    description: str | None = None
    is_public: bool = False
    guests: list[GuestCreate] = []
    tasks: list[TaskCreate] = []

    @field_validator("tasks", mode="before")
    @classmethod
    def _wrap_task_descriptions(cls, value):
        # Plain strings are shorthand for {"description": ...}
        if isinstance(value, list):
            return [{"description": t} if isinstance(t, str) else t for t in value]
        return value


class EventUpdate(CamelModel):
    """Partial update. Only keys present in the request are applied."""

    name: str | None = PydanticField(default=None, min_length=1)
    date: dt.date | None = None
    time: str | None = PydanticField(default=None, min_length=1)
    location: str | None = PydanticField(default=None, min_length=1)
    description: str | None = None
    is_public: bool | None = None


class ScrapedEvent(CamelModel):
    """An event suggested by the AI backend. Never stored as-is."""

    name: str = PydanticField(min_length=1)
    date: str = PydanticField(min_length=1)
    location: str = PydanticField(min_length=1)
    description: str


class ScrapedEventRegistration(CamelModel):
    """A scraped event the current user wants to attend."""

    name: str = PydanticField(min_length=1)
    date: dt.date
    location: str = PydanticField(min_length=1)
    description: str | None = None
