"""Event creation workflow.

Creating an event touches three collaborators in a fixed order:

    IDLE -> ROLE_PROMOTING -> ALLOCATING -> UPLOADING_COVER
         -> SCAFFOLDING_FOLDERS (n/4) -> PERSISTING_RECORD -> DONE | FAILED

Every step waits for the previous one to finish. The run is not atomic:

- Role promotion is best-effort. Its failure is recorded in
  ``RolePromotionOutcome`` and creation carries on.
- A failed cover upload or folder write stops the run before any event
  record is written. Folders that were already written stay in storage.
- A failed record write leaves the scaffolded folders in storage.

Nothing is retried and nothing is rolled back. Calling again allocates a new
event ID.
"""
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date as date_type
from enum import Enum

from eventshare.core.identity import SessionContext
from eventshare.events.errors import (
    EventShareError,
    InvalidEventDraft,
    NotAuthenticated,
    RecordWriteFailed,
)
from eventshare.events.ids import generate_event_id
from eventshare.models import Event, User, UserRole
from eventshare.models.event import utc_now_iso
from eventshare.records.store import EventRecordStore
from eventshare.storage.namespace import DIRECTORY_CONTENT_TYPE, cover_key, folder_keys
from eventshare.storage.objects import ObjectStorage

logger = logging.getLogger(__name__)


class ProvisioningState(str, Enum):
    IDLE = "idle"
    ROLE_PROMOTING = "role_promoting"
    ALLOCATING = "allocating"
    UPLOADING_COVER = "uploading_cover"
    SCAFFOLDING_FOLDERS = "scaffolding_folders"
    PERSISTING_RECORD = "persisting_record"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class CoverImage:
    """Cover image bytes as uploaded. No size limit is applied."""

    body: bytes
    content_type: str = "image/jpeg"


@dataclass
class EventDraft:
    """Fields submitted by the organizer."""

    name: str
    date: str
    description: str | None = None
    cover_image: CoverImage | None = None

    def validate(self) -> None:
        """Raise InvalidEventDraft unless name and an ISO date are present.

        Other ISO spellings (``20250101``, ``2025-W01-1``) are accepted and
        rewritten as ``YYYY-MM-DD``.
        """
        if not (self.name or "").strip() or not (self.date or "").strip():
            raise InvalidEventDraft("Please fill in all required fields")
        try:
            parsed = date_type.fromisoformat(self.date.strip())
        except ValueError as e:
            raise InvalidEventDraft(f"Invalid event date: {self.date}") from e
        self.date = parsed.isoformat()


@dataclass(frozen=True)
class RolePromotionOutcome:
    """Result of the best-effort user record update."""

    succeeded: bool
    error: str | None = None


@dataclass
class EventProvisioning:
    """State of one event creation attempt.

    Attributes:
        context: Identity of the creator.
        draft: Submitted event fields.
        state: Current state.
        history: Every state entered, in order.
        event_id: ID allocated for this attempt, None until allocated.
        role_promotion: Outcome of the user record update.
        cover_url: Public URL of the uploaded cover image.
        folders_written: Folder keys successfully written, in order.
        folders_total: Number of folder keys this attempt must write.
        event: The persisted record, set when the run is DONE.
        failure: The error that ended the run, set when FAILED.
    """

    context: SessionContext
    draft: EventDraft
    state: ProvisioningState = ProvisioningState.IDLE
    history: list[ProvisioningState] = field(default_factory=lambda: [ProvisioningState.IDLE])
    event_id: str | None = None
    role_promotion: RolePromotionOutcome | None = None
    cover_url: str = ""
    folders_written: list[str] = field(default_factory=list)
    folders_total: int = 0
    event: Event | None = None
    failure: Exception | None = None

    @property
    def status(self) -> str:
        if self.state is ProvisioningState.SCAFFOLDING_FOLDERS:
            return f"{self.state.value}({len(self.folders_written)}/{self.folders_total})"
        return self.state.value

    @property
    def succeeded(self) -> bool:
        return self.state is ProvisioningState.DONE


TransitionHook = Callable[[EventProvisioning], None]


class EventProvisioner:
    """
    Runs the event creation workflow against a record store and object storage.

    Usage:
        >>> provisioner = EventProvisioner(store, storage)
        >>> provisioning = provisioner.start(context, EventDraft("Party", "2025-01-01"))
        >>> event = provisioner.run(provisioning)
    """

    def __init__(
        self,
        store: EventRecordStore,
        storage: ObjectStorage,
        id_factory: Callable[[], str] = generate_event_id,
        on_transition: TransitionHook | None = None,
    ):
        self.store = store
        self.storage = storage
        self.id_factory = id_factory
        self.on_transition = on_transition

    def start(self, context: SessionContext, draft: EventDraft) -> EventProvisioning:
        """Check preconditions and return an IDLE provisioning.

        Raises:
            InvalidEventDraft: Name or date missing or malformed.
            NotAuthenticated: The context has no identifier.
        """
        draft.validate()
        if not context.is_authenticated:
            raise NotAuthenticated()
        return EventProvisioning(context=context, draft=draft)

    def run(self, provisioning: EventProvisioning) -> Event:
        """Execute every step of the workflow.

        Returns the stored event. On failure the provisioning is left in the
        FAILED state with ``failure`` set, and the error is re-raised.

        Raises:
            StorageWriteFailed: The cover image or a folder could not be written.
            RecordWriteFailed: The event record could not be stored.
        """
        identifier = provisioning.context.identifier
        try:
            self._transition(provisioning, ProvisioningState.ROLE_PROMOTING)
            provisioning.role_promotion = self._promote_role(provisioning)

            self._transition(provisioning, ProvisioningState.ALLOCATING)
            event_id = self._allocate_id(provisioning)

            if provisioning.draft.cover_image is not None:
                self._transition(provisioning, ProvisioningState.UPLOADING_COVER)
                provisioning.cover_url = self._upload_cover(event_id, provisioning.draft.cover_image)

            self._scaffold_folders(provisioning, event_id)

            self._transition(provisioning, ProvisioningState.PERSISTING_RECORD)
            provisioning.event = self._persist(provisioning, event_id)
        except Exception as e:
            provisioning.failure = e
            self._transition(provisioning, ProvisioningState.FAILED)
            if isinstance(e, EventShareError):
                logger.error(f"Event creation failed for {identifier}: {e}")
            else:
                logger.exception(f"Unexpected error creating event for {identifier}")
            raise

        self._transition(provisioning, ProvisioningState.DONE)
        logger.info(f"Created event {provisioning.event.id} for {identifier}")
        return provisioning.event

    def _transition(self, provisioning: EventProvisioning, state: ProvisioningState) -> None:
        provisioning.state = state
        provisioning.history.append(state)
        self._notify(provisioning)

    def _notify(self, provisioning: EventProvisioning) -> None:
        logger.debug(f"Provisioning {provisioning.event_id or '-'}: {provisioning.status}")
        if self.on_transition is not None:
            self.on_transition(provisioning)

    def _allocate_id(self, provisioning: EventProvisioning) -> str:
        # Drawn once per attempt. Role promotion needs it first to link the
        # user record, so it may already be set when ALLOCATING is entered.
        if provisioning.event_id is None:
            provisioning.event_id = self.id_factory()
        return provisioning.event_id

    def _promote_role(self, provisioning: EventProvisioning) -> RolePromotionOutcome:
        """Make the creator an organizer and append the new event ID.

        Never raises: any failure is logged and reported in the outcome.
        """
        context = provisioning.context
        identifier = context.identifier
        try:
            event_id = self._allocate_id(provisioning)
            existing = self.store.get_user(identifier)

            created_events: list[str] = []
            if existing is not None and isinstance(existing.created_events, list):
                created_events = list(existing.created_events)
            if event_id not in created_events:
                created_events.append(event_id)

            profile = context.current_user_profile()
            user = User(
                email=existing.email if existing else identifier,
                user_id=existing.user_id if existing else identifier,
                name=profile.name or (existing.name if existing else ""),
                mobile=profile.mobile or (existing.mobile if existing else ""),
                role=UserRole.ORGANIZER,
                created_events=created_events,
            )
            if not self.store.put_user(user):
                logger.error(f"Failed to link event {event_id} to user {identifier}")
                return RolePromotionOutcome(succeeded=False, error="User record write failed")
        except Exception as e:
            logger.error(f"Error updating user createdEvents for {identifier}: {e}")
            return RolePromotionOutcome(succeeded=False, error=str(e))

        logger.info(f"User {identifier} promoted to organizer with {len(created_events)} created events")
        return RolePromotionOutcome(succeeded=True)

    def _upload_cover(self, event_id: str, cover: CoverImage) -> str:
        return self.storage.put_object(cover_key(event_id), cover.body, cover.content_type)

    def _scaffold_folders(self, provisioning: EventProvisioning, event_id: str) -> None:
        keys = folder_keys(event_id)
        provisioning.folders_total = len(keys)
        self._transition(provisioning, ProvisioningState.SCAFFOLDING_FOLDERS)

        for key in keys:
            self.storage.put_object(key, b"", DIRECTORY_CONTENT_TYPE)
            provisioning.folders_written.append(key)
            self._notify(provisioning)

    def _persist(self, provisioning: EventProvisioning, event_id: str) -> Event:
        identifier = provisioning.context.identifier
        draft = provisioning.draft
        now = utc_now_iso()
        event = Event(
            id=event_id,
            name=draft.name.strip(),
            date=draft.date.strip(),
            description=draft.description,
            cover_image=provisioning.cover_url,
            photo_count=0,
            video_count=0,
            guest_count=0,
            user_email=identifier,
            organizer_id=identifier,
            user_id=identifier,
            created_at=now,
            updated_at=now,
        )
        try:
            stored = self.store.put_event(event)
        except Exception as e:
            raise RecordWriteFailed("Failed to store event data") from e
        if not stored:
            raise RecordWriteFailed("Failed to store event data")
        return event


def create_event(
    store: EventRecordStore,
    storage: ObjectStorage,
    context: SessionContext,
    draft: EventDraft,
    id_factory: Callable[[], str] = generate_event_id,
) -> Event:
    """Create an event in one call. See ``EventProvisioner.run``."""
    provisioner = EventProvisioner(store, storage, id_factory=id_factory)
    return provisioner.run(provisioner.start(context, draft))
