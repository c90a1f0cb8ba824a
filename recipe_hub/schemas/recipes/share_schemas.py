from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class ShareCreate(BaseModel):
    shared_with_email: EmailStr = Field(..., description="被分享用户的邮箱")
    can_edit: bool = Field(False, description="是否允许对方编辑")


class ShareRead(BaseModel):
    id: UUID
    recipe_id: UUID
    shared_with_id: UUID
    shared_with_email: str
    shared_with_name: Optional[str] = None
    can_edit: bool
    created_at: datetime
