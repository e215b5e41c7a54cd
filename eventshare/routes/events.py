"""Event routes for the organizer dashboard."""
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile

from eventshare.core.identity import SessionContext, get_session_context
from eventshare.events.aggregator import aggregate_events
from eventshare.events.deletion import delete_event
from eventshare.events.errors import (
    AggregationFailed,
    DeletionFailed,
    InvalidEventDraft,
    NotAuthenticated,
    RecordWriteFailed,
    StorageWriteFailed,
)
from eventshare.events.provisioner import CoverImage, EventDraft, EventProvisioner
from eventshare.events.statistics import StatisticsSnapshot, compute_statistics
from eventshare.records.store import EventRecordStore, get_record_store
from eventshare.routes.schemas import EventCreated, EventRead, RolePromotionRead
from eventshare.storage.namespace import COVER_FILENAME
from eventshare.storage.objects import ObjectStorage, get_object_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


def _storage_failure_message(error: StorageWriteFailed) -> str:
    if error.is_auth_failure:
        return "AWS authentication failed. Please check your credentials."
    if error.key.endswith(COVER_FILENAME):
        return "Failed to upload cover image. Please try again."
    return "Failed to create event folders. Please try again."


@router.get("", response_model=list[EventRead])
async def list_events(
    context: SessionContext = Depends(get_session_context),
    store: EventRecordStore = Depends(get_record_store),
):
    """
    List every event the current user is linked to.

    Merges events where the user is the legacy participant, the organizer or
    the creator. Each event appears once. Returns 401 without an identity
    and 502 if any lookup fails, in which case no partial list is returned.
    """
    try:
        events = aggregate_events(store, context.current_user_identifier())
    except NotAuthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except AggregationFailed as e:
        raise HTTPException(status_code=502, detail=str(e))

    return [EventRead.model_validate(event) for event in events]


@router.get("/statistics", response_model=StatisticsSnapshot)
async def event_statistics(
    context: SessionContext = Depends(get_session_context),
    store: EventRecordStore = Depends(get_record_store),
):
    """
    Get event, photo, video and guest totals for the current user.

    Always succeeds: missing identity or a failed lookup yields zeros.
    """
    return compute_statistics(store, context.current_user_identifier())


@router.post("", response_model=EventCreated, status_code=201)
async def create_event(
    name: str = Form(""),
    date: str = Form(""),
    description: str | None = Form(None),
    cover_image: UploadFile | None = File(None),
    context: SessionContext = Depends(get_session_context),
    store: EventRecordStore = Depends(get_record_store),
    storage: ObjectStorage = Depends(get_object_storage),
):
    """
    Create a shared event.

    Promotes the caller to organizer, uploads the optional cover image,
    scaffolds the event's storage folders and stores the event record.
    Returns the new event and whether the user record update succeeded.
    """
    cover = None
    if cover_image is not None and cover_image.filename:
        cover = CoverImage(
            body=await cover_image.read(),
            content_type=cover_image.content_type or "application/octet-stream",
        )

    draft = EventDraft(name=name, date=date, description=description or None, cover_image=cover)
    provisioner = EventProvisioner(store, storage)

    try:
        provisioning = provisioner.start(context, draft)
    except InvalidEventDraft as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotAuthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))

    try:
        event = provisioner.run(provisioning)
    except StorageWriteFailed as e:
        raise HTTPException(status_code=502, detail=_storage_failure_message(e))
    except RecordWriteFailed:
        raise HTTPException(status_code=500, detail="Failed to store event data. Please try again.")

    return EventCreated(
        event=EventRead.model_validate(event),
        role_promotion=RolePromotionRead.model_validate(provisioning.role_promotion),
    )


@router.delete("/{event_id}", status_code=204)
async def remove_event(
    event_id: str,
    owner: str | None = None,
    context: SessionContext = Depends(get_session_context),
    store: EventRecordStore = Depends(get_record_store),
):
    """
    Delete an event record.

    ``owner`` is the identifier the event was stored under and defaults to
    the current user. Storage objects are left in place. Returns 404 if no
    matching event exists and 401 without an identity, even when ``owner``
    is given.
    """
    if not context.is_authenticated:
        raise HTTPException(status_code=401, detail="User not authenticated")
    owner = owner or context.current_user_identifier()

    try:
        deleted = delete_event(store, event_id, owner)
    except DeletionFailed:
        raise HTTPException(status_code=500, detail="An error occurred while deleting the event.")

    if not deleted:
        raise HTTPException(status_code=404, detail="Failed to delete event. Please try again.")

    return Response(status_code=204)
