"""User model for account holders.

This module defines the User table plus the request/response shapes of the
signup, login and profile endpoints. Password hashes never leave this
module's table class: every response goes through ``UserRead``.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    """Account role, fixed at signup."""

    ADMIN = "admin"
    USER = "user"


class User(SQLModel, table=True):
    """A registered account.

    The first account ever created becomes the admin; everyone after that
    is a regular user. The admin role grants no extra permissions yet.

    Attributes:
        id: Unique identifier (UUID).
        name: Display name, copied onto events the user creates.
        email: Login email. Unique and compared exactly as stored.
        hashed_password: bcrypt hash of the password.
        role: "admin" or "user".
        created_at: When the account was created.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    hashed_password: str
    role: UserRole = Field(default=UserRole.USER)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class UserRead(BaseModel):
    """Public projection of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: UserRole


class SignupRequest(BaseModel):
    name: str = PydanticField(min_length=1)
    email: str = PydanticField(min_length=1)
    password: str = PydanticField(min_length=1)


class LoginRequest(BaseModel):
    email: str = PydanticField(min_length=1)
    password: str = PydanticField(min_length=1)


class AuthResponse(BaseModel):
    user: UserRead
    token: str


class UsersExistResponse(BaseModel):
    exists: bool
