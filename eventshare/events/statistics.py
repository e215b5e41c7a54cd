"""Roll-up counters for the dashboard."""
import logging

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from eventshare.events.aggregator import aggregate_events
from eventshare.records.store import EventRecordStore

logger = logging.getLogger(__name__)


class StatisticsSnapshot(BaseModel):
    """Counters for one user, recomputed on every request."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    event_count: int = 0
    photo_count: int = 0
    video_count: int = 0
    guest_count: int = 0


def compute_statistics(store: EventRecordStore, identifier: str | None) -> StatisticsSnapshot:
    """
    Compute event, photo, video and guest totals for a user.

    Counts run over the same deduplicated event set as the dashboard list but
    are queried afresh. Any failure, including a missing identifier, yields
    the all-zero snapshot: an empty account and a failed lookup look the same
    to the caller.
    """
    if not identifier:
        return StatisticsSnapshot()

    try:
        events = aggregate_events(store, identifier)
    except Exception:
        logger.exception(f"Failed to compute statistics for {identifier}")
        return StatisticsSnapshot()

    return StatisticsSnapshot(
        event_count=len(events),
        photo_count=sum(e.photo_count for e in events),
        video_count=sum(e.video_count for e in events),
        guest_count=sum(e.guest_count for e in events),
    )
