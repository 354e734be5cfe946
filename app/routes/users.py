"""Account routes: signup, login, profile and tickets."""
from fastapi import APIRouter, Depends, status

from app.dependencies import get_auth_service, get_current_user, get_event_service
from app.models import User
from app.models.event import EventRead
from app.models.user import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserRead,
    UsersExistResponse,
)
from app.services.auth import AuthResult, AuthService
from app.services.events import EventService

router = APIRouter(prefix="/users", tags=["users"])


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(user=UserRead.model_validate(result.user), token=result.token)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, auth: AuthService = Depends(get_auth_service)):
    """
    Create an account and return it with a token.

    The first account created becomes the admin. Returns 400 if the email
    is already registered.
    """
    return _auth_response(auth.signup(payload.name, payload.email, payload.password))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """
    Sign in with email and password.

    Returns 401 with the same message whether the email is unknown or the
    password is wrong.
    """
    return _auth_response(auth.login(payload.email, payload.password))


@router.get("/exists", response_model=UsersExistResponse)
def users_exist(auth: AuthService = Depends(get_auth_service)):
    """Tell the client whether to offer signup (no accounts yet) or login."""
    return UsersExistResponse(exists=auth.users_exist())


@router.get("/me", response_model=UserRead)
def current_user(user: User = Depends(get_current_user)):
    return user


@router.get("/me/tickets", response_model=list[EventRead])
def my_tickets(
    user: User = Depends(get_current_user),
    events: EventService = Depends(get_event_service),
):
    """Events where the current user's email is on the guest list."""
    return events.list_for_guest_email(user.email)
