"""User routes for sign-in registration and organizer promotion."""
from fastapi import APIRouter, Depends, HTTPException

from eventshare.core.identity import SessionContext, get_session_context
from eventshare.events.accounts import LoginClaims, promote_to_organizer, register_login
from eventshare.events.errors import NotAuthenticated, RecordWriteFailed
from eventshare.records.store import EventRecordStore, get_record_store
from eventshare.routes.schemas import LoginRequest, RolePromotionRead, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/login", response_model=UserRead)
async def login(request: LoginRequest, store: EventRecordStore = Depends(get_record_store)):
    """
    Register a sign-in.

    Expects claims from an identity token the gateway has already verified.
    Creates the user on first sign-in and promotes them to organizer when
    they signed in to create an event.
    """
    claims = LoginClaims(subject=request.subject, email=request.email, name=request.name)
    try:
        user = register_login(store, claims, request.pending_action)
    except NotAuthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except RecordWriteFailed as e:
        raise HTTPException(status_code=500, detail=str(e))

    return UserRead.model_validate(user)


@router.post("/organizer", response_model=RolePromotionRead)
async def become_organizer(
    context: SessionContext = Depends(get_session_context),
    store: EventRecordStore = Depends(get_record_store),
):
    """
    Promote the current user to organizer.

    Best-effort: the response reports whether the user record was updated.
    Returns 401 only when there is no identity at all.
    """
    if not context.is_authenticated:
        raise HTTPException(status_code=401, detail="User not authenticated")

    outcome = promote_to_organizer(store, context)
    return RolePromotionRead.model_validate(outcome)
