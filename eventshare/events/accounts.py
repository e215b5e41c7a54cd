"""User records created and updated around sign-in and event creation."""
import logging
from dataclasses import dataclass

from eventshare.core.identity import SessionContext
from eventshare.events.errors import NotAuthenticated, RecordWriteFailed
from eventshare.events.provisioner import RolePromotionOutcome
from eventshare.models import User, UserRole
from eventshare.records.store import EventRecordStore

logger = logging.getLogger(__name__)

# Action stashed before sign-in that makes the new user an organizer
CREATE_EVENT_ACTION = "createEvent"


@dataclass(frozen=True)
class LoginClaims:
    """Claims from an already verified identity token."""

    subject: str
    email: str
    name: str = ""


def register_login(
    store: EventRecordStore,
    claims: LoginClaims,
    pending_action: str | None = None,
) -> User:
    """
    Make sure a user record exists after sign-in.

    A first sign-in creates the user with an empty mobile number. The role is
    ``organizer`` when the user signed in to create an event, otherwise it is
    left unset. A returning user is only rewritten when they signed in to
    create an event, in which case they become an organizer and keep their
    mobile number and created events.

    Raises:
        NotAuthenticated: The claims carry no email.
        RecordWriteFailed: The user record could not be written.
    """
    if not claims.email:
        raise NotAuthenticated()

    creating_event = pending_action == CREATE_EVENT_ACTION
    existing = store.get_user(claims.email)

    if existing is None:
        user = User(
            email=claims.email,
            user_id=claims.subject or claims.email,
            name=claims.name,
            mobile="",  # Collected later
            role=UserRole.ORGANIZER if creating_event else None,
            created_events=[],
        )
    elif creating_event:
        user = User(
            email=existing.email,
            user_id=claims.subject or existing.user_id,
            name=claims.name or existing.name,
            mobile=existing.mobile or "",
            role=UserRole.ORGANIZER,
            created_events=list(existing.created_events or []),
        )
    else:
        return existing

    if not store.put_user(user):
        raise RecordWriteFailed(f"Failed to store user {claims.email}")

    logger.info(f"Registered sign-in for {claims.email} (role: {user.role.value if user.role else 'unset'})")
    return store.get_user(claims.email) or user


def promote_to_organizer(store: EventRecordStore, context: SessionContext) -> RolePromotionOutcome:
    """
    Mark the current user as an organizer before the create form opens.

    Best-effort: failures are logged and reported, never raised. Created
    events already on the record are kept.
    """
    identifier = context.current_user_identifier()
    if not identifier:
        return RolePromotionOutcome(succeeded=False, error="User not authenticated")

    try:
        existing = store.get_user(identifier)
        profile = context.current_user_profile()
        user = User(
            email=existing.email if existing else identifier,
            user_id=existing.user_id if existing else identifier,
            name=profile.name or (existing.name if existing else ""),
            mobile=profile.mobile or (existing.mobile if existing else ""),
            role=UserRole.ORGANIZER,
            created_events=list(existing.created_events or []) if existing else [],
        )
        if not store.put_user(user):
            return RolePromotionOutcome(succeeded=False, error="User record write failed")
    except Exception as e:
        logger.error(f"Error updating user role for {identifier}: {e}")
        return RolePromotionOutcome(succeeded=False, error=str(e))

    logger.info(f"User {identifier} role updated to organizer")
    return RolePromotionOutcome(succeeded=True)
