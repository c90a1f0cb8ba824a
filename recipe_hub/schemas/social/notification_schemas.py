from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from recipe_hub.enums.social_enums import NotificationType
from recipe_hub.schemas.users.user_schemas import UserSummary


class NotificationRead(BaseModel):
    id: UUID
    type: NotificationType
    read: bool
    created_at: datetime
    from_user: Optional[UserSummary] = None


class NotificationUpdate(BaseModel):
    read: Optional[bool] = None
