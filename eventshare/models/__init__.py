from eventshare.models.event import Event
from eventshare.models.user import User, UserRole

__all__ = ["Event", "User", "UserRole"]
