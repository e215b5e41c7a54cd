"""Aggregated view of every event a user is associated with.

A user can be linked to an event three ways, accreted over time:

- **participant**: the legacy ``user_email`` field
- **organizer**: the ``organizer_id`` field
- **creator**: the ``user_id`` field

Each link is looked up separately and the results are merged by event ID.
The first copy of an event wins and the merged order is participant matches,
then organizer matches not yet seen, then creator matches not yet seen.
"""
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Flag, auto

from eventshare.events.errors import AggregationFailed, NotAuthenticated
from eventshare.models import Event
from eventshare.records.store import EventRecordStore

logger = logging.getLogger(__name__)


class MembershipRole(Flag):
    NONE = 0
    PARTICIPANT = auto()
    ORGANIZER = auto()
    CREATOR = auto()


@dataclass
class EventMembership:
    """An event together with the roles under which the user holds it."""

    event: Event
    roles: MembershipRole = MembershipRole.NONE

    @property
    def event_id(self) -> str:
        return self.event.id

    def has_role(self, role: MembershipRole) -> bool:
        return role in self.roles


# Precedence order of the lookups
LOOKUP_ORDER = (
    MembershipRole.PARTICIPANT,
    MembershipRole.ORGANIZER,
    MembershipRole.CREATOR,
)


def merge_memberships(
    *results: tuple[MembershipRole, Iterable[Event]],
) -> dict[str, EventMembership]:
    """Merge lookup results into an insertion-ordered mapping keyed by event ID.

    ``results`` are ``(role, events)`` pairs in precedence order. An event
    already present keeps its first copy and only gains the new role.
    """
    merged: dict[str, EventMembership] = {}
    for role, events in results:
        for event in events:
            membership = merged.get(event.id)
            if membership is None:
                merged[event.id] = EventMembership(event=event, roles=role)
            else:
                membership.roles |= role
    return merged


def _require_identifier(identifier: str | None) -> str:
    if not identifier:
        raise NotAuthenticated()
    return identifier


def _lookup(store: EventRecordStore, role: MembershipRole, identifier: str) -> list[Event]:
    if role is MembershipRole.PARTICIPANT:
        return store.query_by_participant(identifier)
    if role is MembershipRole.ORGANIZER:
        return store.query_by_organizer(identifier)
    return store.query_by_creator(identifier)


def aggregate_memberships(
    store: EventRecordStore, identifier: str | None
) -> list[EventMembership]:
    """Look up and merge every event linked to ``identifier``.

    Lookups run one after another; if any raises, nothing accumulated so far
    is returned and ``AggregationFailed`` carries the cause.

    Raises:
        NotAuthenticated: ``identifier`` is empty. No lookup is issued.
        AggregationFailed: A lookup raised.
    """
    identifier = _require_identifier(identifier)

    results = []
    for role in LOOKUP_ORDER:
        try:
            events = _lookup(store, role, identifier)
        except Exception as e:
            logger.error(f"Event lookup ({role.name.lower()}) failed for {identifier}: {e}")
            raise AggregationFailed(
                f"Failed to load events ({role.name.lower()} lookup)"
            ) from e
        results.append((role, events))

    merged = merge_memberships(*results)
    logger.debug(f"Aggregated {len(merged)} events for {identifier}")
    return list(merged.values())


def aggregate_events(store: EventRecordStore, identifier: str | None) -> list[Event]:
    """Deduplicated list of every event linked to ``identifier``."""
    return [m.event for m in aggregate_memberships(store, identifier)]
