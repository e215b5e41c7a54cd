"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from eventshare.core.database import get_session
from eventshare.core.identity import SessionContext, UserProfile
from eventshare.events.errors import StorageFailureReason, StorageWriteFailed
from eventshare.main import app
from eventshare.models import Event
from eventshare.records.store import EventRecordStore
from eventshare.storage.objects import get_object_storage

USER_EMAIL = "ada@example.com"


class RecordingObjectStorage:
    """In-memory object storage that records every write attempt.

    ``fail_on_call`` makes the n-th attempt (1-based) fail; ``fail_keys``
    makes writes to those keys fail.
    """

    def __init__(
        self,
        fail_on_call: int | None = None,
        fail_keys: tuple[str, ...] = (),
        reason: StorageFailureReason = StorageFailureReason.OTHER,
    ):
        self.fail_on_call = fail_on_call
        self.fail_keys = set(fail_keys)
        self.reason = reason
        self.attempts: list[str] = []
        self.objects: dict[str, tuple[bytes, str]] = {}

    def put_object(self, key: str, body: bytes, content_type: str) -> str:
        self.attempts.append(key)
        if len(self.attempts) == self.fail_on_call or key in self.fail_keys:
            raise StorageWriteFailed(key, self.reason)
        self.objects[key] = (body, content_type)
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return f"https://test-bucket.s3.amazonaws.com/{key}"

    @property
    def written_keys(self) -> list[str]:
        return list(self.objects)


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


@pytest.fixture(name="store")
def store_fixture(session: Session) -> EventRecordStore:
    return EventRecordStore(session)


@pytest.fixture(name="storage")
def storage_fixture() -> RecordingObjectStorage:
    return RecordingObjectStorage()


@pytest.fixture(name="context")
def context_fixture() -> SessionContext:
    return SessionContext(
        identifier=USER_EMAIL,
        profile=UserProfile(name="Ada Lovelace", mobile="+260970000000"),
    )


@pytest.fixture(name="client")
def client_fixture(session: Session, storage: RecordingObjectStorage):
    """Create a test client with the test database session and storage."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_object_storage] = lambda: storage
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="make_event")
def make_event_fixture(session: Session):
    """Factory inserting an event with the given owner fields."""

    def make_event(
        event_id: str,
        owner: str = USER_EMAIL,
        *,
        user_email: str | None = None,
        organizer_id: str | None = None,
        user_id: str | None = None,
        **fields,
    ) -> Event:
        event = Event(
            id=event_id,
            name=fields.pop("name", f"Event {event_id}"),
            date=fields.pop("date", "2025-06-01"),
            user_email=user_email if user_email is not None else owner,
            organizer_id=organizer_id if organizer_id is not None else owner,
            user_id=user_id if user_id is not None else owner,
            **fields,
        )
        session.add(event)
        session.commit()
        session.refresh(event)
        return event

    return make_event


@pytest.fixture(name="storage_factory")
def storage_factory_fixture():
    """The recording storage class, for tests that need failure injection."""
    return RecordingObjectStorage
