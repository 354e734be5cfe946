"""Tests for the auth and event aggregate services."""

from datetime import date
from uuid import uuid4

import pytest
from sqlmodel import Session

from app.core.errors import (
    Conflict,
    Forbidden,
    InvalidCredentials,
    NotFound,
    Unauthorized,
)
from app.core.security import create_access_token
from app.models import Event, GuestStatus, User, UserRole
from app.models.event import (
    EventCreate,
    EventUpdate,
    ScrapedEventRegistration,
)
from app.services.auth import AuthService
from app.services.events import EventService, OwnerOnlyPolicy, get_policy
from app.stores.sql import SQLEventStore


class TestAuthService:
    def test_first_user_is_admin_then_users(self, auth_service: AuthService):
        alice = auth_service.signup("Alice", "a@x.com", "pw").user
        bob = auth_service.signup("Bob", "b@x.com", "pw").user
        carol = auth_service.signup("Carol", "c@x.com", "pw").user

        assert alice.role == UserRole.ADMIN
        assert bob.role == UserRole.USER
        assert carol.role == UserRole.USER

    def test_signup_stores_only_a_hash(self, auth_service: AuthService):
        user = auth_service.signup("Alice", "a@x.com", "pw").user
        assert user.hashed_password != "pw"

    def test_signup_duplicate_email(self, auth_service: AuthService, alice: User):
        with pytest.raises(Conflict):
            auth_service.signup("Other Alice", "a@x.com", "other")

    def test_signup_email_is_case_sensitive(self, auth_service: AuthService, alice: User):
        user = auth_service.signup("Upper Alice", "A@x.com", "pw").user
        assert user.id != alice.id

    def test_login_success_returns_resolvable_token(
        self, auth_service: AuthService, alice: User
    ):
        result = auth_service.login("a@x.com", "pw-alice")

        assert result.user.id == alice.id
        assert auth_service.resolve_token(result.token).id == alice.id

    def test_login_failures_are_indistinguishable(
        self, auth_service: AuthService, alice: User
    ):
        with pytest.raises(InvalidCredentials) as wrong_password:
            auth_service.login("a@x.com", "wrong")
        with pytest.raises(InvalidCredentials) as unknown_email:
            auth_service.login("nobody@x.com", "pw-alice")

        assert wrong_password.value.message == unknown_email.value.message
        assert wrong_password.value.code == unknown_email.value.code

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_resolve_token_rejects_missing_or_malformed(
        self, auth_service: AuthService, token
    ):
        with pytest.raises(Unauthorized):
            auth_service.resolve_token(token)

    def test_resolve_token_for_unknown_user(self, auth_service: AuthService):
        with pytest.raises(Unauthorized):
            auth_service.resolve_token(create_access_token(uuid4()))

    def test_users_exist(self, auth_service: AuthService):
        assert auth_service.users_exist() is False
        auth_service.signup("Alice", "a@x.com", "pw")
        assert auth_service.users_exist() is True


class TestEventLifecycle:
    def test_create_event(self, event_service: EventService, alice: User):
        event = event_service.create(
            alice,
            EventCreate(
                name="Launch",
                date=date(2025, 1, 10),
                time="18:00",
                location="HQ",
                is_public=True,
                tasks=[{"description": "Book venue"}],
            ),
        )

        assert event.user_id == alice.id
        assert event.user_name == "Alice"
        assert event.is_public is True
        assert event.guests == []
        assert [t.description for t in event.tasks] == ["Book venue"]
        assert event.tasks[0].completed is False

    def test_create_event_with_guests_starts_pending(
        self, event_service: EventService, alice: User
    ):
        event = event_service.create(
            alice,
            EventCreate(
                name="Launch",
                date=date(2025, 1, 10),
                time="18:00",
                location="HQ",
                guests=[{"name": "Carol", "email": "c@x.com"}],
                tasks=["Book venue"],
            ),
        )

        assert [(g.name, g.status) for g in event.guests] == [
            ("Carol", GuestStatus.PENDING)
        ]
        assert [t.description for t in event.tasks] == ["Book venue"]

    def test_list_for_owner_only_returns_own_events(
        self, event_service: EventService, sample_event: Event, bob: User, alice: User
    ):
        assert [e.id for e in event_service.list_for_owner(alice)] == [sample_event.id]
        assert event_service.list_for_owner(bob) == []

    def test_partial_update_changes_only_given_field(
        self, event_service: EventService, event_with_guests_and_tasks: Event, alice: User
    ):
        event = event_with_guests_and_tasks
        before = (
            event.date,
            event.time,
            event.location,
            event.description,
            event.is_public,
            [g.id for g in event.guests],
            [t.id for t in event.tasks],
        )

        updated = event_service.update(event.id, alice, EventUpdate(name="X"))

        assert updated.name == "X"
        assert (
            updated.date,
            updated.time,
            updated.location,
            updated.description,
            updated.is_public,
            [g.id for g in updated.guests],
            [t.id for t in updated.tasks],
        ) == before

    def test_update_can_unpublish(
        self, event_service: EventService, public_event: Event, alice: User
    ):
        updated = event_service.update(
            public_event.id, alice, EventUpdate.model_validate({"isPublic": False})
        )
        assert updated.is_public is False

    def test_update_ignores_null_for_required_fields(
        self, event_service: EventService, sample_event: Event, alice: User
    ):
        updated = event_service.update(
            sample_event.id, alice, EventUpdate.model_validate({"name": None})
        )
        assert updated.name == "Team Offsite"

    def test_update_by_non_owner_is_rejected_even_for_admin(
        self, event_service: EventService, session: Session, alice: User, bob: User
    ):
        bobs_event = event_service.create(
            bob,
            EventCreate(name="Bob's", date=date(2025, 2, 2), time="10:00", location="Home"),
        )

        assert alice.role == UserRole.ADMIN
        with pytest.raises(Forbidden):
            event_service.update(bobs_event.id, alice, EventUpdate(name="Hijacked"))
        with pytest.raises(Forbidden):
            event_service.delete(bobs_event.id, alice)

        session.refresh(bobs_event)
        assert bobs_event.name == "Bob's"

    def test_update_missing_event(self, event_service: EventService, alice: User):
        with pytest.raises(NotFound):
            event_service.update(uuid4(), alice, EventUpdate(name="X"))

    def test_delete_cascades(
        self, event_service: EventService, event_with_guests_and_tasks: Event, alice: User
    ):
        event_id = event_with_guests_and_tasks.id

        event_service.delete(event_id, alice)

        assert event_service.list_for_owner(alice) == []
        assert event_service.list_for_guest_email("c@x.com") == []
        with pytest.raises(NotFound):
            event_service.add_task(event_id, alice, "Anything")

    def test_delete_missing_event(self, event_service: EventService, alice: User):
        with pytest.raises(NotFound):
            event_service.delete(uuid4(), alice)


class TestPublicAccess:
    def test_private_event_is_not_found(
        self, event_service: EventService, sample_event: Event
    ):
        with pytest.raises(NotFound):
            event_service.get_public(sample_event.id)

    def test_public_event_is_returned(
        self, event_service: EventService, public_event: Event
    ):
        assert event_service.get_public(public_event.id).id == public_event.id

    def test_register_once_per_email(
        self, event_service: EventService, public_event: Event
    ):
        guest = event_service.public_register(public_event.id, "Carol", "c@x.com")
        assert guest.status == GuestStatus.ATTENDING

        with pytest.raises(Conflict):
            event_service.public_register(public_event.id, "Carol", "c@x.com")

        other = event_service.public_register(public_event.id, "Dave", "d@x.com")
        assert [g.id for g in event_service.get_public(public_event.id).guests] == [
            guest.id,
            other.id,
        ]

    def test_register_on_private_event_is_not_found(
        self, event_service: EventService, sample_event: Event
    ):
        with pytest.raises(NotFound):
            event_service.public_register(sample_event.id, "Carol", "c@x.com")

    def test_register_scraped_creates_private_attended_event(
        self, event_service: EventService, alice: User
    ):
        event = event_service.register_scraped(
            alice,
            ScrapedEventRegistration(
                name="Harbor Jazz Night",
                date=date(2025, 6, 1),
                location="Pier 5",
                description="Live jazz",
            ),
        )

        assert event.time == "12:00"
        assert event.is_public is False
        assert event.user_id == alice.id
        assert [(g.name, g.email, g.status) for g in event.guests] == [
            ("Alice", "a@x.com", GuestStatus.ATTENDING)
        ]
        assert event.tasks == []
        assert [e.id for e in event_service.list_for_guest_email("a@x.com")] == [event.id]


class TestGuests:
    def test_add_guest_is_pending(
        self, event_service: EventService, sample_event: Event, alice: User
    ):
        guest = event_service.add_guest(sample_event.id, alice, "Erin", "e@x.com")
        assert guest.status == GuestStatus.PENDING

    def test_any_user_may_add_guest_by_default(
        self, event_service: EventService, sample_event: Event, bob: User
    ):
        guest = event_service.add_guest(sample_event.id, bob, "Erin", "e@x.com")
        assert guest.event_id == sample_event.id

    def test_owner_policy_blocks_non_owner(
        self, session: Session, sample_event: Event, bob: User, alice: User
    ):
        strict = EventService(SQLEventStore(session), policy=OwnerOnlyPolicy())

        with pytest.raises(Forbidden):
            strict.add_guest(sample_event.id, bob, "Erin", "e@x.com")
        with pytest.raises(Forbidden):
            strict.add_task(sample_event.id, bob, "Sneaky task")
        assert strict.add_guest(sample_event.id, alice, "Erin", "e@x.com")

    def test_get_policy_by_name(self):
        assert isinstance(get_policy("owner"), OwnerOnlyPolicy)
        assert not isinstance(get_policy("permissive"), OwnerOnlyPolicy)
        with pytest.raises(ValueError):
            get_policy("admins-only")

    def test_update_guest_status(
        self, event_service: EventService, event_with_guests_and_tasks: Event, alice: User
    ):
        guest = event_with_guests_and_tasks.guests[0]

        event_service.update_guest_status(
            event_with_guests_and_tasks.id, guest.id, alice, GuestStatus.DECLINED
        )

        assert guest.status == GuestStatus.DECLINED

    def test_update_missing_guest(
        self, event_service: EventService, sample_event: Event, alice: User
    ):
        with pytest.raises(NotFound):
            event_service.update_guest_status(
                sample_event.id, uuid4(), alice, GuestStatus.MAYBE
            )

    def test_delete_guest(
        self, event_service: EventService, event_with_guests_and_tasks: Event, alice: User
    ):
        event = event_with_guests_and_tasks
        carol, dave = event.guests

        event_service.delete_guest(event.id, carol.id, alice)

        assert [g.id for g in event.guests] == [dave.id]
        with pytest.raises(NotFound):
            event_service.delete_guest(event.id, carol.id, alice)

    def test_guest_on_missing_event(self, event_service: EventService, alice: User):
        with pytest.raises(NotFound):
            event_service.add_guest(uuid4(), alice, "Erin", "e@x.com")


class TestTasks:
    def test_toggle_twice_restores_state(
        self, event_service: EventService, sample_event: Event, alice: User
    ):
        task = event_service.add_task(sample_event.id, alice, "Book venue")
        assert task.completed is False

        assert event_service.toggle_task(sample_event.id, task.id, alice).completed is True
        assert event_service.toggle_task(sample_event.id, task.id, alice).completed is False

    def test_new_tasks_are_appended(
        self, event_service: EventService, event_with_guests_and_tasks: Event, alice: User
    ):
        task = event_service.add_task(event_with_guests_and_tasks.id, alice, "Decorate")
        assert event_with_guests_and_tasks.tasks[-1].id == task.id

    def test_delete_task(
        self, event_service: EventService, event_with_guests_and_tasks: Event, alice: User
    ):
        event = event_with_guests_and_tasks
        first = event.tasks[0]

        event_service.delete_task(event.id, first.id, alice)

        assert first.id not in [t.id for t in event.tasks]
        with pytest.raises(NotFound):
            event_service.toggle_task(event.id, first.id, alice)

    def test_task_of_another_event_is_not_found(
        self,
        event_service: EventService,
        event_with_guests_and_tasks: Event,
        public_event: Event,
        alice: User,
    ):
        task = event_with_guests_and_tasks.tasks[0]
        with pytest.raises(NotFound):
            event_service.toggle_task(public_event.id, task.id, alice)
