"""Event deletion."""
import logging

from sqlalchemy.exc import SQLAlchemyError

from eventshare.events.errors import DeletionFailed
from eventshare.records.store import EventRecordStore

logger = logging.getLogger(__name__)


def delete_event(store: EventRecordStore, event_id: str, owner_identifier: str) -> bool:
    """
    Delete an event record.

    ``owner_identifier`` is the partition key the record was stored under; it
    is not checked against the caller here. Objects in the event's storage
    namespace are left in place.

    Returns:
        True if a record was deleted, False if no record matched.

    Raises:
        DeletionFailed: The record store raised while deleting.
    """
    try:
        deleted = store.delete_event(event_id, owner_identifier)
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete event {event_id}: {e}")
        raise DeletionFailed(f"Failed to delete event {event_id}") from e

    if deleted:
        logger.info(f"Deleted event {event_id} owned by {owner_identifier}")
    else:
        logger.info(f"No event {event_id} owned by {owner_identifier} to delete")
    return deleted
