"""Guest model for tracking invitations and RSVPs.

Guests are embedded in an Event: they are created, updated and deleted
through their parent event and disappear when it is deleted.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.event import Event


class GuestStatus(str, Enum):
    """RSVP status of a guest."""

    PENDING = "Pending"
    ATTENDING = "Attending"
    MAYBE = "Maybe"
    DECLINED = "Declined"


class Guest(SQLModel, table=True):
    """A person invited to, or registered for, an event.

    Guests added by the organizer start as "Pending". Guests who register
    themselves on a public event start as "Attending".

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the parent Event.
        name: Guest display name.
        email: Guest email, used to find a user's tickets.
        status: One of "Pending", "Attending", "Maybe" or "Declined".
        position: Insertion order within the event.
        event: Reference to the parent Event object.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="event.id", ondelete="CASCADE", index=True)
    name: str
    email: str = Field(index=True)
    status: GuestStatus = Field(default=GuestStatus.PENDING)
    position: int = Field(default=0)

    # Relationship
    event: Optional["Event"] = Relationship(back_populates="guests")


class GuestRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    status: GuestStatus


class GuestCreate(BaseModel):
    name: str = PydanticField(min_length=1)
    email: str = PydanticField(min_length=1)


class GuestStatusUpdate(BaseModel):
    status: GuestStatus
