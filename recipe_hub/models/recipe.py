from typing import Optional, List
import uuid

from sqlalchemy import JSON, Text, UniqueConstraint
from sqlmodel import Field

from recipe_hub.enums.recipe_enums import RecipeStatus
from recipe_hub.models._model_utils.guid import GUID
from recipe_hub.models.base.base_model import BaseModel


class Recipe(BaseModel, table=True):
    # 所有者，创建后不可修改
    user_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True, nullable=False)

    name: str = Field(nullable=False)
    ingredients: List[str] = Field(default_factory=list, sa_type=JSON)
    instructions: str = Field(default="", sa_type=Text)
    cuisine_type: Optional[str] = Field(default=None, index=True)
    prep_time_minutes: Optional[int] = None
    cook_time_minutes: Optional[int] = None
    status: RecipeStatus = Field(default=RecipeStatus.TO_TRY)
    is_public: bool = Field(default=False, index=True)

    # 封面图 = image_urls 的第一张
    image_url: Optional[str] = None
    image_urls: List[str] = Field(default_factory=list, sa_type=JSON)


class RecipeShare(BaseModel, table=True):
    """菜谱所有者授予另一个用户的访问权限（只读 / 可编辑）"""
    recipe_id: uuid.UUID = Field(foreign_key="recipe.id", sa_type=GUID(), index=True)
    owner_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID())
    shared_with_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True)
    can_edit: bool = Field(default=False)

    __table_args__ = (
        UniqueConstraint("recipe_id", "shared_with_id", name="uq_recipe_share_recipe_user"),
    )


class RecipeComment(BaseModel, table=True):
    recipe_id: uuid.UUID = Field(foreign_key="recipe.id", sa_type=GUID(), index=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True)
    text: str = Field(sa_type=Text, nullable=False)


class RecipeLike(BaseModel, table=True):
    recipe_id: uuid.UUID = Field(foreign_key="recipe.id", sa_type=GUID(), index=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True)

    __table_args__ = (
        UniqueConstraint("recipe_id", "user_id", name="uq_recipe_like_recipe_user"),
    )


class RecipeFavorite(BaseModel, table=True):
    recipe_id: uuid.UUID = Field(foreign_key="recipe.id", sa_type=GUID(), index=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True)

    __table_args__ = (
        UniqueConstraint("recipe_id", "user_id", name="uq_recipe_favorite_recipe_user"),
    )
