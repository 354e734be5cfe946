"""Task model for event preparation tracking.

This module defines the Task model which represents individual to-dos an
organizer needs to complete before an event. Tasks are added manually or
taken over from AI suggestions, and are toggled done/undone.
"""

from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.event import Event


class Task(SQLModel, table=True):
    """A to-do item associated with an event.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the parent Event.
        description: Display text for the task.
        completed: Whether the task has been marked done.
        position: Insertion order within the event.
        event: Reference to the parent Event object.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="event.id", ondelete="CASCADE", index=True)
    description: str
    completed: bool = Field(default=False)
    position: int = Field(default=0)

    # Relationship
    event: Optional["Event"] = Relationship(back_populates="tasks")


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    description: str
    completed: bool


class TaskCreate(BaseModel):
    description: str = PydanticField(min_length=1)
