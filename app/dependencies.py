"""FastAPI dependency wiring: stores, services, bearer auth and the AI assistant."""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from app.core.config import settings
from app.core.database import get_session
from app.models import User
from app.services.assistant import EventAssistant, OpenAIEventAssistant
from app.services.auth import AuthService
from app.services.events import EventService, get_policy
from app.stores.interfaces import EventStore, UserStore
from app.stores.sql import SQLEventStore, SQLUserStore

# auto_error=False so a missing header reaches AuthService and gets the
# same 401 body as a bad token
_bearer = HTTPBearer(auto_error=False)

# Shared across requests; the OpenAI client is created on first use
_assistant: EventAssistant | None = None


def get_user_store(session: Session = Depends(get_session)) -> UserStore:
    return SQLUserStore(session)


def get_event_store(session: Session = Depends(get_session)) -> EventStore:
    return SQLEventStore(session)


def get_auth_service(store: UserStore = Depends(get_user_store)) -> AuthService:
    return AuthService(store)


def get_event_service(store: EventStore = Depends(get_event_store)) -> EventService:
    return EventService(store, policy=get_policy(settings.guest_task_policy))


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the ``Authorization: Bearer`` header to a user, or fail with 401."""
    token = credentials.credentials if credentials else None
    return auth.resolve_token(token)


def get_assistant() -> EventAssistant:
    global _assistant
    if _assistant is None:
        _assistant = OpenAIEventAssistant()
    return _assistant
