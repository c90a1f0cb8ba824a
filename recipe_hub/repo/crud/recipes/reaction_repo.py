from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.models.recipe import RecipeLike, RecipeFavorite, Recipe
from recipe_hub.models.user import User
from recipe_hub.repo.crud.common.base_repo import BaseRepository
from recipe_hub.repo.crud.recipes.recipe_repo import visible_to


class _RecipeReactionMixin:
    """点赞和收藏共用的 (recipe_id, user_id) 唯一对操作"""

    async def add(self, recipe_id: UUID, user_id: UUID):
        return await self.upsert(
            {"recipe_id": recipe_id, "user_id": user_id},
            conflict_fields=["recipe_id", "user_id"],
        )

    async def remove(self, recipe_id: UUID, user_id: UUID) -> int:
        return await self.delete_where(
            self.model.recipe_id == recipe_id,
            self.model.user_id == user_id,
        )

    async def has(self, recipe_id: UUID, user_id: UUID) -> bool:
        return await self.exists(
            self.model.recipe_id == recipe_id,
            self.model.user_id == user_id,
        )

    async def count_for_recipe(self, recipe_id: UUID) -> int:
        return await self.count_where(self.model.recipe_id == recipe_id)

    async def delete_for_recipes(self, recipe_ids: List[UUID]) -> int:
        if not recipe_ids:
            return 0
        return await self.delete_where(self.model.recipe_id.in_(recipe_ids))

    async def delete_by_user(self, user_id: UUID) -> int:
        return await self.delete_where(self.model.user_id == user_id)


class RecipeLikeRepository(_RecipeReactionMixin, BaseRepository[RecipeLike, BaseModel, BaseModel]):
    def __init__(self, db: AsyncSession, context: Optional[Dict[str, Any]] = None):
        super().__init__(db=db, model=RecipeLike, context=context)


class RecipeFavoriteRepository(_RecipeReactionMixin, BaseRepository[RecipeFavorite, BaseModel, BaseModel]):
    def __init__(self, db: AsyncSession, context: Optional[Dict[str, Any]] = None):
        super().__init__(db=db, model=RecipeFavorite, context=context)

    async def list_visible_for(self, user_id: UUID) -> List[Tuple[Recipe, User]]:
        """
        我的收藏，最新收藏的在前。
        收藏之后失去访问权限的菜谱（取消分享 / 改为私密）不会出现在结果里。
        """
        stmt = (
            select(Recipe, User)
            .join(RecipeFavorite, RecipeFavorite.recipe_id == Recipe.id)
            .join(User, User.id == Recipe.user_id)
            .where(RecipeFavorite.user_id == user_id, visible_to(user_id))
            .order_by(desc(RecipeFavorite.created_at))
        )
        result = await self.db.execute(stmt)
        return [(recipe, owner) for recipe, owner in result.all()]
