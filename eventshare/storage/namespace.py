"""Object key layout for an event's storage namespace.

    events/shared/{event_id}/
    events/shared/{event_id}/images/
    events/shared/{event_id}/selfies/
    events/shared/{event_id}/videos/
    events/shared/{event_id}/cover.jpg
"""
from eventshare.core.config import settings

DIRECTORY_CONTENT_TYPE = "application/x-directory"
SUBFOLDERS = ("images", "selfies", "videos")
COVER_FILENAME = "cover.jpg"


def event_prefix(event_id: str, root: str | None = None) -> str:
    root = (root if root is not None else settings.storage_root).strip("/")
    return f"{root}/{event_id}/"


def folder_keys(event_id: str, root: str | None = None) -> list[str]:
    """Placeholder keys for the event folder and its subfolders, in write order."""
    prefix = event_prefix(event_id, root)
    return [prefix] + [f"{prefix}{name}/" for name in SUBFOLDERS]


def cover_key(event_id: str, root: str | None = None) -> str:
    return f"{event_prefix(event_id, root)}{COVER_FILENAME}"
