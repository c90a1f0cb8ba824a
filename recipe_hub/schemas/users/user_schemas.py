from datetime import datetime
from typing import Annotated, Optional, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints

from recipe_hub.enums.user_enums import UserRole
from recipe_hub.schemas.recipes.recipe_schemas import RecipeRead

# ==========================
# 💡 通用类型定义
# ==========================
PasswordStr = Annotated[str, StringConstraints(min_length=8, max_length=128)]
NameStr = Annotated[str, StringConstraints(max_length=200, strip_whitespace=True)]


# ==========================
# 🧾 注册 / 登录
# ==========================
class UserRegister(BaseModel):
    email: EmailStr = Field(..., description="邮箱地址，全局唯一")
    password: PasswordStr = Field(..., description="密码，最少 8 位")
    name: Optional[NameStr] = Field(None, description="昵称")


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class TokenRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="有效期（秒）")


# ==========================
# 🙋 用户更新自己的个人资料
# ==========================
class UserUpdateProfile(BaseModel):
    name: Optional[NameStr] = Field(None, description="昵称")
    image: Optional[str] = Field(None, description="头像 URL")


# ==========================
# 📤 用户读取模型
# ==========================
class UserSummary(BaseModel):
    """嵌入在菜谱、评论、好友等返回值里的用户简要信息"""
    id: UUID
    email: str
    name: Optional[str] = None
    image: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserRead(UserSummary):
    role: UserRole
    disabled: bool
    created_at: datetime


class UserProfileRead(BaseModel):
    """公开主页：用户信息 + 他的公开菜谱"""
    user: UserSummary
    recipes: List[RecipeRead]


# ==========================
# 🛠️ 管理后台
# ==========================
class AdminUserRead(UserRead):
    recipe_count: int = 0


class AdminUserUpdate(BaseModel):
    disabled: bool = Field(..., description="是否禁用该用户")
