from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID

from sqlalchemy import asc, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.models.recipe import RecipeComment, Recipe
from recipe_hub.models.user import User
from recipe_hub.repo.crud.common.base_repo import BaseRepository
from recipe_hub.schemas.recipes.comment_schemas import CommentCreate


class RecipeCommentRepository(BaseRepository[RecipeComment, CommentCreate, CommentCreate]):
    def __init__(self, db: AsyncSession, context: Optional[Dict[str, Any]] = None):
        super().__init__(db=db, model=RecipeComment, context=context)

    async def list_for_recipe(self, recipe_id: UUID) -> List[Tuple[RecipeComment, User]]:
        """按时间正序（最早的在前）"""
        stmt = (
            select(RecipeComment, User)
            .join(User, User.id == RecipeComment.user_id)
            .where(RecipeComment.recipe_id == recipe_id)
            .order_by(asc(RecipeComment.created_at))
        )
        result = await self.db.execute(stmt)
        return [(comment, user) for comment, user in result.all()]

    async def get_on_recipe(self, comment_id: UUID, recipe_id: UUID) -> Optional[RecipeComment]:
        stmt = self._base_stmt().where(
            RecipeComment.id == comment_id,
            RecipeComment.recipe_id == recipe_id,
        )
        return await self._run_and_scalar(stmt, "get_on_recipe")

    async def list_latest(self, limit: int) -> List[Tuple[RecipeComment, User, Recipe]]:
        """管理后台：最新的评论，附带作者与所属菜谱"""
        stmt = (
            select(RecipeComment, User, Recipe)
            .join(User, User.id == RecipeComment.user_id)
            .join(Recipe, Recipe.id == RecipeComment.recipe_id)
            .order_by(desc(RecipeComment.created_at))
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [tuple(row) for row in result.all()]

    async def delete_for_recipes(self, recipe_ids: List[UUID]) -> int:
        if not recipe_ids:
            return 0
        return await self.delete_where(RecipeComment.recipe_id.in_(recipe_ids))

    async def delete_by_user(self, user_id: UUID) -> int:
        return await self.delete_where(RecipeComment.user_id == user_id)
