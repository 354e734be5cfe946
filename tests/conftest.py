"""Shared test fixtures."""

import os

# Settings are read at import time, so configure them before importing the app
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("OPENAI_API_KEY", "")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.core.database import get_session
from app.dependencies import get_assistant
from app.main import app
from app.models import Event, Guest, GuestStatus, Task, User
from app.models.event import ScrapedEvent
from app.services.assistant import EventAssistant, EventSuggestion
from app.services.auth import AuthService
from app.services.events import EventService
from app.stores.sql import SQLEventStore, SQLUserStore


class FakeAssistant(EventAssistant):
    """In-memory stand-in for the AI backend."""

    def __init__(self):
        self.suggestion = EventSuggestion(
            suggestedDescription="A lively launch party.",
            suggestedTasks=["Book venue", "Send invites"],
        )
        self.events = [
            ScrapedEvent(
                name="Harbor Jazz Night",
                date="2025-06-01",
                location="Pier 5",
                description="Live jazz by the water.",
            )
        ]
        self.error: Exception | None = None
        self.prompts: list[str] = []

    async def suggest(self, prompt: str) -> EventSuggestion:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.suggestion

    async def find_events(self, location_query: str) -> list[ScrapedEvent]:
        self.prompts.append(location_query)
        if self.error:
            raise self.error
        return self.events


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="assistant")
def assistant_fixture() -> FakeAssistant:
    return FakeAssistant()


@pytest.fixture(name="client")
def client_fixture(session: Session, assistant: FakeAssistant):
    """Create a test client with the test database session and fake AI."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_assistant] = lambda: assistant
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="auth_service")
def auth_service_fixture(session: Session) -> AuthService:
    return AuthService(SQLUserStore(session))


@pytest.fixture(name="event_service")
def event_service_fixture(session: Session) -> EventService:
    return EventService(SQLEventStore(session))


@pytest.fixture(name="alice")
def alice_fixture(auth_service: AuthService) -> User:
    """The first user, and therefore the admin."""
    return auth_service.signup("Alice", "a@x.com", "pw-alice").user


@pytest.fixture(name="bob")
def bob_fixture(auth_service: AuthService, alice: User) -> User:
    return auth_service.signup("Bob", "b@x.com", "pw-bob").user


@pytest.fixture(name="alice_headers")
def alice_headers_fixture(auth_service: AuthService, alice: User) -> dict:
    token = auth_service.login("a@x.com", "pw-alice").token
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="bob_headers")
def bob_headers_fixture(auth_service: AuthService, bob: User) -> dict:
    token = auth_service.login("b@x.com", "pw-bob").token
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="sample_event")
def sample_event_fixture(session: Session, alice: User) -> Event:
    """A private event owned by Alice."""
    event = Event(
        name="Team Offsite",
        date=date(2025, 3, 14),
        time="09:30",
        location="Lake House",
        description="Planning for next quarter",
        user_id=alice.id,
        user_name=alice.name,
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture(name="public_event")
def public_event_fixture(session: Session, alice: User) -> Event:
    """A public event owned by Alice."""
    event = Event(
        name="Launch",
        date=date(2025, 1, 10),
        time="18:00",
        location="HQ",
        is_public=True,
        user_id=alice.id,
        user_name=alice.name,
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture(name="event_with_guests_and_tasks")
def event_with_guests_and_tasks_fixture(session: Session, sample_event: Event) -> Event:
    """Alice's private event with two guests and two tasks."""
    rows = [
        Guest(event_id=sample_event.id, name="Carol", email="c@x.com", position=0),
        Guest(
            event_id=sample_event.id,
            name="Dave",
            email="d@x.com",
            status=GuestStatus.MAYBE,
            position=1,
        ),
        Task(event_id=sample_event.id, description="Book venue", position=0),
        Task(event_id=sample_event.id, description="Order food", completed=True, position=1),
    ]
    for row in rows:
        session.add(row)
    session.commit()
    session.refresh(sample_event)
    return sample_event
