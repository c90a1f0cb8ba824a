from datetime import datetime
from typing import Annotated, Optional, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from recipe_hub.enums.recipe_enums import RecipeStatus

RecipeNameStr = Annotated[str, StringConstraints(min_length=1, max_length=200, strip_whitespace=True)]


# ==========================
# 🧾 菜谱创建 / 更新
# ==========================
class RecipeCreate(BaseModel):
    name: RecipeNameStr
    ingredients: List[str] = Field(default_factory=list, description="按顺序排列的配料")
    instructions: str = ""
    cuisine_type: Optional[str] = None
    prep_time_minutes: Optional[int] = Field(None, ge=0)
    cook_time_minutes: Optional[int] = Field(None, ge=0)
    status: RecipeStatus = RecipeStatus.TO_TRY
    is_public: bool = False
    image_urls: List[str] = Field(default_factory=list)


class RecipeUpdate(BaseModel):
    """
    部分更新：只有请求里出现的字段才会被修改（model_dump(exclude_unset=True)）。
    所有者 user_id 不在可更新字段之列。
    """
    name: Optional[RecipeNameStr] = None
    ingredients: Optional[List[str]] = None
    instructions: Optional[str] = None
    cuisine_type: Optional[str] = None
    prep_time_minutes: Optional[int] = Field(None, ge=0)
    cook_time_minutes: Optional[int] = Field(None, ge=0)
    status: Optional[RecipeStatus] = None
    is_public: Optional[bool] = None
    image_url: Optional[str] = None
    image_urls: Optional[List[str]] = None


# ==========================
# 📤 菜谱读取模型
# ==========================
class RecipeRead(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    ingredients: List[str]
    instructions: str
    cuisine_type: Optional[str] = None
    prep_time_minutes: Optional[int] = None
    cook_time_minutes: Optional[int] = None
    status: RecipeStatus
    is_public: bool
    image_url: Optional[str] = None
    image_urls: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RecipeOwnerSummary(BaseModel):
    id: UUID
    email: str
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RecipeWithOwnerRead(RecipeRead):
    owner: Optional[RecipeOwnerSummary] = None


class RecipeDetailRead(RecipeRead):
    """详情接口额外返回调用者的访问级别，前端据此决定是否显示编辑按钮"""
    access_level: str
    can_edit: bool
    is_owner: bool


class RecipeSearchRead(RecipeWithOwnerRead):
    like_count: int = 0
    favorite_count: int = 0


class DashboardRead(BaseModel):
    owned: List[RecipeRead]
    shared: List[RecipeWithOwnerRead]


# ==========================
# 🛠️ 管理后台
# ==========================
class AdminRecipeRead(BaseModel):
    id: UUID
    name: str
    is_public: bool
    created_at: datetime
    owner: Optional[RecipeOwnerSummary] = None
    comment_count: int = 0
    like_count: int = 0
