"""Event and user record store.

All reads and writes of Event and User rows go through ``EventRecordStore``.
Lookups return plain lists; writes report success as a boolean so callers
decide how a failed write affects their own outcome.
"""
import logging

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from eventshare.core.database import get_session
from eventshare.models import Event, User

logger = logging.getLogger(__name__)


class EventRecordStore:
    """Record store backed by a SQLModel session.

    Usage:
        >>> store = EventRecordStore(session)
        >>> store.query_by_organizer("ada@example.com")
    """

    def __init__(self, session: Session):
        self.session = session

    def put_event(self, event: Event) -> bool:
        """Insert a new event record.

        Event IDs are never overwritten: inserting an ID that already exists
        fails and returns False.
        """
        try:
            self.session.add(event)
            self.session.commit()
            self.session.refresh(event)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to store event {event.id}: {e}")
            return False
        return True

    def put_user(self, user: User) -> bool:
        """Create or replace the user record keyed by email."""
        try:
            self.session.merge(user)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to store user {user.email}: {e}")
            return False
        return True

    def get_user(self, identifier: str) -> User | None:
        """Find a user by email, falling back to the provider subject ID."""
        user = self.session.get(User, identifier)
        if user is not None:
            return user
        statement = select(User).where(User.user_id == identifier)
        return self.session.exec(statement).first()

    def get_event(self, event_id: str) -> Event | None:
        return self.session.get(Event, event_id)

    def query_by_participant(self, identifier: str) -> list[Event]:
        """Events whose legacy ``user_email`` field matches."""
        statement = (
            select(Event)
            .where(Event.user_email == identifier)
            .order_by(Event.created_at)
        )
        return list(self.session.exec(statement).all())

    def query_by_organizer(self, identifier: str) -> list[Event]:
        statement = (
            select(Event)
            .where(Event.organizer_id == identifier)
            .order_by(Event.created_at)
        )
        return list(self.session.exec(statement).all())

    def query_by_creator(self, identifier: str) -> list[Event]:
        statement = (
            select(Event)
            .where(Event.user_id == identifier)
            .order_by(Event.created_at)
        )
        return list(self.session.exec(statement).all())

    def delete_event(self, event_id: str, owner_identifier: str) -> bool:
        """Delete the event keyed by ``(event_id, owner_identifier)``.

        The owner acts as the partition key: the row is only removed when its
        ``user_email`` matches. Returns False when no such row exists.
        """
        statement = (
            select(Event)
            .where(Event.id == event_id)
            .where(Event.user_email == owner_identifier)
        )
        event = self.session.exec(statement).first()
        if event is None:
            return False

        try:
            self.session.delete(event)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return True


def get_record_store(session: Session = Depends(get_session)) -> EventRecordStore:
    """Dependency for getting a record store bound to the request session."""
    return EventRecordStore(session)
