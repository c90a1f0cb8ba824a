from typing import Optional

from sqlmodel import Field

from recipe_hub.enums.user_enums import UserRole
from recipe_hub.models.base.base_model import BaseModel


class User(BaseModel, table=True):
    __tablename__ = "user"

    email: str = Field(index=True, unique=True, nullable=False)
    hashed_password: str = Field(nullable=False)
    role: UserRole = Field(default=UserRole.USER)
    # 被管理员禁用的用户无法登录，已签发的 token 也会在身份层被拒绝
    disabled: bool = Field(default=False)

    name: Optional[str] = None
    image: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
