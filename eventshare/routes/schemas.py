"""JSON shapes returned by the API, using the dashboard's camelCase names."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from eventshare.models import UserRole


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class EventRead(CamelModel):
    id: str
    name: str
    date: str
    description: str | None = None
    cover_image: str = ""
    photo_count: int = 0
    video_count: int = 0
    guest_count: int = 0
    user_email: str
    organizer_id: str
    user_id: str
    created_at: str
    updated_at: str


class RolePromotionRead(CamelModel):
    succeeded: bool
    error: str | None = None


class EventCreated(CamelModel):
    event: EventRead
    role_promotion: RolePromotionRead


class UserRead(CamelModel):
    email: str
    user_id: str
    name: str = ""
    mobile: str = ""
    role: UserRole | None = None
    created_events: list[str] = []


class LoginRequest(CamelModel):
    subject: str = ""
    email: str
    name: str = ""
    pending_action: str | None = None
