from typing import Optional, Dict, Any, List, Tuple

from pydantic import BaseModel
from sqlalchemy import func, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.models.recipe import Recipe
from recipe_hub.models.user import User
from recipe_hub.repo.crud.common.base_repo import BaseRepository
from recipe_hub.schemas.users.user_schemas import UserUpdateProfile


class UserRepository(BaseRepository[User, BaseModel, UserUpdateProfile]):
    def __init__(self, db: AsyncSession, context: Optional[Dict[str, Any]] = None):
        super().__init__(db=db, model=User, context=context)

    async def get_by_email(self, email: str) -> Optional[User]:
        """邮箱统一按小写存储与比较"""
        return await self.find_by_field(email.strip(), "email", case_insensitive=True)

    async def list_with_recipe_counts(self) -> List[Tuple[User, int]]:
        recipe_count = (
            select(func.count(Recipe.id))
            .where(Recipe.user_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        stmt = select(User, recipe_count).order_by(desc(User.created_at))
        result = await self.db.execute(stmt)
        return [(user, count) for user, count in result.all()]
