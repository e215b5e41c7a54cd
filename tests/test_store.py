"""Tests for the event record store."""

import pytest

from eventshare.models import Event, User, UserRole
from eventshare.records.store import EventRecordStore


def _event(event_id: str, owner: str = "ada@example.com") -> Event:
    return Event(
        id=event_id,
        name="Party",
        date="2025-06-01",
        user_email=owner,
        organizer_id=owner,
        user_id=owner,
    )


class TestEventWrites:
    def test_put_event(self, store: EventRecordStore):
        assert store.put_event(_event("e1")) is True
        assert store.get_event("e1").name == "Party"

    def test_put_event_never_overwrites(self, store: EventRecordStore):
        assert store.put_event(_event("e1")) is True
        assert store.put_event(_event("e1", owner="eve@example.com")) is False

        assert store.get_event("e1").user_email == "ada@example.com"
        # Session is still usable after the failed write
        assert store.put_event(_event("e2")) is True

    @pytest.mark.parametrize("counter", ["photo_count", "video_count", "guest_count"])
    def test_put_event_rejects_negative_counts(self, store: EventRecordStore, counter):
        event = _event("neg")
        setattr(event, counter, -5)

        assert store.put_event(event) is False
        assert store.get_event("neg") is None


class TestUserWrites:
    def test_put_user_creates_and_replaces(self, store: EventRecordStore):
        assert store.put_user(User(email="ada@example.com", user_id="ada@example.com"))
        assert store.put_user(
            User(
                email="ada@example.com",
                user_id="ada@example.com",
                role=UserRole.ORGANIZER,
                created_events=["e1"],
            )
        )

        user = store.get_user("ada@example.com")
        assert user.role == UserRole.ORGANIZER
        assert user.created_events == ["e1"]

    def test_get_user_by_subject(self, store: EventRecordStore):
        store.put_user(User(email="ada@example.com", user_id="google-sub-1"))

        assert store.get_user("google-sub-1").email == "ada@example.com"
        assert store.get_user("nobody@example.com") is None


class TestQueries:
    def test_lookups_match_their_own_field(self, store: EventRecordStore, make_event):
        make_event("p", user_email="ada@example.com", organizer_id="x", user_id="x")
        make_event("o", user_email="x", organizer_id="ada@example.com", user_id="x")
        make_event("c", user_email="x", organizer_id="x", user_id="ada@example.com")

        assert [e.id for e in store.query_by_participant("ada@example.com")] == ["p"]
        assert [e.id for e in store.query_by_organizer("ada@example.com")] == ["o"]
        assert [e.id for e in store.query_by_creator("ada@example.com")] == ["c"]

    def test_delete_requires_matching_owner(self, store: EventRecordStore, make_event):
        make_event("e1")

        assert store.delete_event("e1", "eve@example.com") is False
        assert store.get_event("e1") is not None
        assert store.delete_event("e1", "ada@example.com") is True
        assert store.get_event("e1") is None
