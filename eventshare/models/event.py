"""Event model for shared photo/video events.

This module defines the Event record which represents one shared event and
the counters shown on the dashboard. Each event owns a storage namespace
under ``events/shared/{id}/`` where guests' images, selfies and videos are
collected.
"""

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel


def utc_now_iso() -> str:
    """Current instant as an ISO-8601 string with a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Event(SQLModel, table=True):
    """A shared event created by an organizer.

    The three owner fields are historical: ``user_email`` is the legacy
    participant field kept for backward compatibility, while
    ``organizer_id`` and ``user_id`` were added later. All three hold the
    creator's identifier when the event is created, and ``id``,
    ``organizer_id`` and ``user_id`` never change afterwards.

    Attributes:
        id: Short opaque identifier generated when the event is created.
        name: Display name of the event.
        date: Calendar date of the event (``YYYY-MM-DD``).
        description: Optional free text.
        cover_image: Public URL of the cover image, empty when none.
        photo_count: Number of photos uploaded to the event.
        video_count: Number of videos uploaded to the event.
        guest_count: Number of guests who joined the event.
        user_email: Legacy participant identifier.
        organizer_id: Identifier of the organizer.
        user_id: Identifier of the creator.
        created_at: ISO-8601 creation timestamp.
        updated_at: ISO-8601 timestamp of the last update.
    """

    __table_args__ = (
        CheckConstraint("photo_count >= 0", name="ck_event_photo_count"),
        CheckConstraint("video_count >= 0", name="ck_event_video_count"),
        CheckConstraint("guest_count >= 0", name="ck_event_guest_count"),
    )

    id: str = Field(primary_key=True)
    name: str
    date: str
    description: str | None = None
    cover_image: str = ""
    photo_count: int = Field(default=0, ge=0)
    video_count: int = Field(default=0, ge=0)
    guest_count: int = Field(default=0, ge=0)
    user_email: str = Field(index=True)
    organizer_id: str = Field(index=True)
    user_id: str = Field(index=True)
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
