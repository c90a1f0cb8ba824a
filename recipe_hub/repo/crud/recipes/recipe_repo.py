# recipe_hub/repo/crud/recipes/recipe_repo.py

from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID

from sqlalchemy import String, and_, cast, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.enums.recipe_enums import RecipeStatus
from recipe_hub.models.recipe import Recipe, RecipeShare, RecipeLike, RecipeFavorite, RecipeComment
from recipe_hub.models.user import User
from recipe_hub.repo.crud.common.base_repo import BaseRepository
from recipe_hub.schemas.recipes.recipe_schemas import RecipeCreate, RecipeUpdate


def share_exists_for(caller_id: UUID):
    """EXISTS(分享给 caller 的记录)，与外层的 Recipe 相关联"""
    return (
        select(RecipeShare.id)
        .where(
            RecipeShare.recipe_id == Recipe.id,
            RecipeShare.shared_with_id == caller_id,
        )
        .correlate(Recipe)
        .exists()
    )


def visible_to(caller_id: UUID):
    """
    SQL 版本的可见性判定：所有者 OR 存在分享 OR 公开。
    必须与 evaluate_access 的规则 1-4 一致；所有列表都在查询中过滤，而不是取回后再过滤。
    """
    return or_(
        Recipe.user_id == caller_id,
        share_exists_for(caller_id),
        Recipe.is_public.is_(True),
    )


def text_matches(q: str):
    """名称、做法、菜系、配料任一包含关键词（不区分大小写）；% 和 _ 按普通字符匹配"""
    return or_(
        Recipe.name.icontains(q, autoescape=True),
        Recipe.instructions.icontains(q, autoescape=True),
        Recipe.cuisine_type.icontains(q, autoescape=True),
        cast(Recipe.ingredients, String).icontains(q, autoescape=True),
    )


def _count_of(model) -> Any:
    return (
        select(func.count(model.id))
        .where(model.recipe_id == Recipe.id)
        .correlate(Recipe)
        .scalar_subquery()
    )


class RecipeRepository(BaseRepository[Recipe, RecipeCreate, RecipeUpdate]):
    def __init__(self, db: AsyncSession, context: Optional[Dict[str, Any]] = None):
        """
        初始化菜谱仓库。
        """
        super().__init__(db=db, model=Recipe, context=context)

    # ==========================
    # 单个菜谱 + 访问判定所需的数据
    # ==========================

    async def get_visible_with_share(
            self, recipe_id: UUID, caller_id: UUID
    ) -> Optional[Tuple[Recipe, Optional[RecipeShare]]]:
        """
        取回菜谱以及分享给 caller 的那条分享记录（可能为 None）。
        调用者看不到的菜谱直接查不出来，和不存在没有区别。
        """
        stmt = (
            select(Recipe, RecipeShare)
            .outerjoin(
                RecipeShare,
                and_(
                    RecipeShare.recipe_id == Recipe.id,
                    RecipeShare.shared_with_id == caller_id,
                ),
            )
            .where(Recipe.id == recipe_id, visible_to(caller_id))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    # ==========================
    # 列表查询
    # ==========================

    async def list_owned(self, owner_id: UUID, status: Optional[RecipeStatus] = None) -> List[Recipe]:
        filters = {"user_id": owner_id, "status": status}
        return await self.find_all(filters, order_by=["-updated_at"])

    async def list_shared_with(
            self, caller_id: UUID, status: Optional[RecipeStatus] = None
    ) -> List[Tuple[Recipe, User]]:
        stmt = (
            select(Recipe, User)
            .join(User, User.id == Recipe.user_id)
            .where(share_exists_for(caller_id))
        )
        if status is not None:
            stmt = stmt.where(Recipe.status == status)
        stmt = stmt.order_by(desc(Recipe.updated_at))
        result = await self.db.execute(stmt)
        return [(recipe, owner) for recipe, owner in result.all()]

    async def list_public(
            self,
            exclude_user_id: UUID,
            q: Optional[str] = None,
            cuisine: Optional[str] = None,
    ) -> List[Tuple[Recipe, User]]:
        """公开菜谱流，不包含调用者自己的菜谱"""
        stmt = (
            select(Recipe, User)
            .join(User, User.id == Recipe.user_id)
            .where(Recipe.is_public.is_(True), Recipe.user_id != exclude_user_id)
        )
        if cuisine:
            stmt = stmt.where(Recipe.cuisine_type.icontains(cuisine, autoescape=True))
        if q:
            stmt = stmt.where(text_matches(q))
        stmt = stmt.order_by(desc(Recipe.updated_at))
        result = await self.db.execute(stmt)
        return [(recipe, owner) for recipe, owner in result.all()]

    async def search(
            self,
            caller_id: UUID,
            q: Optional[str] = None,
            cuisine: Optional[str] = None,
            prep_max: Optional[int] = None,
            include_shared: bool = True,
    ) -> List[Tuple[Recipe, User, int, int]]:
        """
        在“我的菜谱”（以及分享给我的菜谱）里搜索，附带点赞数与收藏数。
        """
        scope = Recipe.user_id == caller_id
        if include_shared:
            scope = or_(scope, share_exists_for(caller_id))

        stmt = (
            select(Recipe, User, _count_of(RecipeLike), _count_of(RecipeFavorite))
            .join(User, User.id == Recipe.user_id)
            .where(scope)
        )
        if q:
            stmt = stmt.where(text_matches(q))
        if cuisine:
            stmt = stmt.where(Recipe.cuisine_type.icontains(cuisine, autoescape=True))
        if prep_max is not None:
            stmt = stmt.where(Recipe.prep_time_minutes <= prep_max)
        stmt = stmt.order_by(desc(Recipe.updated_at))

        result = await self.db.execute(stmt)
        return [tuple(row) for row in result.all()]

    async def list_public_by_owner(self, owner_id: UUID) -> List[Recipe]:
        filters = {"user_id": owner_id, "is_public": True}
        return await self.find_all(filters, order_by=["-updated_at"])

    async def list_with_counts(self) -> List[Tuple[Recipe, User, int, int]]:
        """管理后台：全部菜谱 + 评论数 + 点赞数"""
        stmt = (
            select(Recipe, User, _count_of(RecipeComment), _count_of(RecipeLike))
            .join(User, User.id == Recipe.user_id)
            .order_by(desc(Recipe.created_at))
        )
        result = await self.db.execute(stmt)
        return [tuple(row) for row in result.all()]
