"""Account and bearer-token service.

Signup, login and token resolution. The service keeps no state of its own:
users live in the injected ``UserStore``.
"""
import logging
from dataclasses import dataclass

from app.core.errors import Conflict, InvalidCredentials, Unauthorized
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.models import User, UserRole
from app.stores.interfaces import UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """A user together with a freshly issued token."""

    user: User
    token: str


class AuthService:
    """Service for signup, login and token resolution."""

    def __init__(self, store: UserStore) -> None:
        self._store = store

    def signup(self, name: str, email: str, password: str) -> AuthResult:
        """Create an account and sign it in.

        The very first account becomes the admin.

        Raises:
            Conflict: If an account with this email already exists.
        """
        if self._store.get_user_by_email(email) is not None:
            raise Conflict("An account with this email already exists.")

        role = UserRole.USER if self._store.count_users() > 0 else UserRole.ADMIN
        user = self._store.add_user(
            User(
                name=name,
                email=email,
                hashed_password=hash_password(password),
                role=role,
            )
        )
        logger.info(f"Created user {user.id} with role {user.role.value}")
        return AuthResult(user=user, token=create_access_token(user.id))

    def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and issue a token.

        Raises:
            InvalidCredentials: Same error for unknown email and wrong password.
        """
        user = self._store.get_user_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            logger.info("Rejected login attempt")
            raise InvalidCredentials()
        return AuthResult(user=user, token=create_access_token(user.id))

    def resolve_token(self, token: str | None) -> User:
        """Return the user a bearer token was issued to.

        Raises:
            Unauthorized: If the token is missing, malformed, expired, or the
                user it names no longer exists.
        """
        if not token:
            raise Unauthorized("Not authorized, no token")
        user = self._store.get_user(decode_access_token(token))
        if user is None:
            raise Unauthorized("Not authorized, user not found")
        return user

    def users_exist(self) -> bool:
        """Whether any account has been created yet."""
        return self._store.count_users() > 0
