"""User model linking people to the events they created.

This module defines the User record. A user is keyed by email address and
carries the role used by the dashboard together with the ordered list of
event IDs the user has created.
"""

from enum import Enum

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    """Role of a user. ``None`` on the record means the role is unset."""

    PARTICIPANT = "participant"
    ORGANIZER = "organizer"


class User(SQLModel, table=True):
    """A person known to the service.

    Roles only move toward ``organizer`` in the event creation flow and
    ``created_events`` only ever grows: new IDs are appended in creation
    order and existing entries are never removed or reordered.

    Attributes:
        email: Email address, the primary identifier.
        user_id: Identifier issued by the identity provider. Falls back to
            the email address when no subject ID is known.
        name: Display name.
        mobile: Mobile number, empty until the user provides it.
        role: Current role, None when unset.
        created_events: IDs of events created by this user, oldest first.
    """
    email: str = Field(primary_key=True)
    user_id: str = Field(index=True)
    name: str = ""
    mobile: str = ""
    role: UserRole | None = Field(default=None)
    created_events: list[str] = Field(default_factory=list, sa_column=Column(JSON))
