from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, model_validator

from recipe_hub.enums.social_enums import FriendshipStatus
from recipe_hub.schemas.users.user_schemas import UserSummary


class FriendRequestCreate(BaseModel):
    """按用户 ID 或邮箱指定对方，两者至少提供一个"""
    user_id: Optional[UUID] = None
    email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def check_target(self) -> "FriendRequestCreate":
        if self.user_id is None and self.email is None:
            raise ValueError("必须提供 user_id 或 email")
        return self


class FriendRequestSentRead(BaseModel):
    request_id: UUID
    to_user: UserSummary


class FriendRequestRead(BaseModel):
    id: UUID
    from_user: UserSummary
    created_at: datetime


class FriendRead(BaseModel):
    id: UUID
    friend: UserSummary


class FriendshipStatusRead(BaseModel):
    status: FriendshipStatus
    request_id: Optional[UUID] = None
