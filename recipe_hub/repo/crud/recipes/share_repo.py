from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import asc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.models.recipe import RecipeShare
from recipe_hub.models.user import User
from recipe_hub.repo.crud.common.base_repo import BaseRepository


class RecipeShareRepository(BaseRepository[RecipeShare, BaseModel, BaseModel]):
    def __init__(self, db: AsyncSession, context: Optional[Dict[str, Any]] = None):
        super().__init__(db=db, model=RecipeShare, context=context)

    async def grant(self, recipe_id: UUID, owner_id: UUID, shared_with_id: UUID, can_edit: bool) -> RecipeShare:
        """
        按 (recipe_id, shared_with_id) 原子地插入或更新，重复授权只会修改 can_edit。
        """
        return await self.upsert(
            {
                "recipe_id": recipe_id,
                "owner_id": owner_id,
                "shared_with_id": shared_with_id,
                "can_edit": can_edit,
            },
            conflict_fields=["recipe_id", "shared_with_id"],
            update_fields={"can_edit": can_edit},
        )

    async def revoke(self, recipe_id: UUID, shared_with_id: UUID) -> int:
        return await self.delete_where(
            RecipeShare.recipe_id == recipe_id,
            RecipeShare.shared_with_id == shared_with_id,
        )

    async def list_for_recipe(self, recipe_id: UUID) -> List[Tuple[RecipeShare, User]]:
        stmt = (
            select(RecipeShare, User)
            .join(User, User.id == RecipeShare.shared_with_id)
            .where(RecipeShare.recipe_id == recipe_id)
            .order_by(asc(RecipeShare.created_at))
        )
        result = await self.db.execute(stmt)
        return [(share, user) for share, user in result.all()]

    async def delete_for_recipes(self, recipe_ids: List[UUID]) -> int:
        if not recipe_ids:
            return 0
        return await self.delete_where(RecipeShare.recipe_id.in_(recipe_ids))

    async def delete_involving_user(self, user_id: UUID) -> int:
        return await self.delete_where(
            or_(RecipeShare.shared_with_id == user_id, RecipeShare.owner_id == user_id)
        )
