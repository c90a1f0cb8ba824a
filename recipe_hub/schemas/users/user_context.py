# 专门用于在接口/服务之间传递当前用户的身份信息
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from recipe_hub.enums.user_enums import UserRole


class UserContext(BaseModel):
    id: UUID
    email: str
    role: UserRole = UserRole.USER
    disabled: bool = False
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
