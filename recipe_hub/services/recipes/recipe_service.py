# recipe_hub/services/recipes/recipe_service.py
from typing import List, Optional, Sequence
from uuid import UUID

from recipe_hub.core.exceptions import PermissionDeniedException
from recipe_hub.core.permissions.recipe_access import AccessLevel
from recipe_hub.core.permissions import recipe_access
from recipe_hub.core.permissions.recipes_permission import recipe_policy
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.enums.recipe_enums import RecipeStatus
from recipe_hub.models.recipe import Recipe
from recipe_hub.repo.crud.recipes.comment_repo import RecipeCommentRepository
from recipe_hub.repo.crud.recipes.reaction_repo import RecipeLikeRepository, RecipeFavoriteRepository
from recipe_hub.repo.crud.recipes.share_repo import RecipeShareRepository
from recipe_hub.schemas.recipes.recipe_schemas import (
    RecipeCreate,
    RecipeUpdate,
    RecipeRead,
    RecipeDetailRead,
    RecipeWithOwnerRead,
    RecipeOwnerSummary,
    RecipeSearchRead,
    DashboardRead,
)
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.recipes.recipe_access_service import RecipeAccessService

# 这些列在数据库中不可为空，PATCH 里显式传 null 时忽略
_NON_NULLABLE_FIELDS = {"name", "ingredients", "instructions", "status", "is_public", "image_urls"}


def to_owner_read(recipe: Recipe, owner) -> RecipeWithOwnerRead:
    return RecipeWithOwnerRead(
        **RecipeRead.model_validate(recipe).model_dump(),
        owner=RecipeOwnerSummary.model_validate(owner),
    )


class RecipeService(RecipeAccessService):
    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.share_repo: RecipeShareRepository = factory.get_repo_by_type(RecipeShareRepository)
        self.comment_repo: RecipeCommentRepository = factory.get_repo_by_type(RecipeCommentRepository)
        self.like_repo: RecipeLikeRepository = factory.get_repo_by_type(RecipeLikeRepository)
        self.favorite_repo: RecipeFavoriteRepository = factory.get_repo_by_type(RecipeFavoriteRepository)

    # ==========================
    # 单个菜谱
    # ==========================

    async def create_recipe(self, recipe_in: RecipeCreate, current_user: UserContext) -> Recipe:
        data = recipe_in.model_dump()
        data["user_id"] = current_user.id
        data["image_url"] = data["image_urls"][0] if data["image_urls"] else None
        recipe = await self.recipe_repo.create(data)
        self.logger.info(f"【菜谱】用户 {current_user.id} 创建了菜谱 {recipe.id}")
        return recipe

    async def get_recipe(self, recipe_id: UUID, current_user: UserContext) -> Recipe:
        return await self.load_viewable(recipe_id, current_user)

    async def get_recipe_detail(self, recipe_id: UUID, current_user: UserContext) -> RecipeDetailRead:
        recipe, level = await self.load_with_access(recipe_id, current_user)
        recipe_policy.ensure_can_view(level)
        return RecipeDetailRead(
            **RecipeRead.model_validate(recipe).model_dump(),
            access_level=level.name,
            can_edit=recipe_access.can_edit(level),
            is_owner=level == AccessLevel.OWNER,
        )

    async def update_recipe(self, recipe_id: UUID, recipe_in: RecipeUpdate, current_user: UserContext) -> Recipe:
        """
        部分更新。看不到 -> 404；只读 -> 403。
        设置 image_urls 时封面图重置为第一张。
        """
        recipe, level = await self.load_with_access(recipe_id, current_user)
        recipe_policy.ensure_can_edit(level)

        update_data = recipe_in.model_dump(exclude_unset=True)
        for field in _NON_NULLABLE_FIELDS:
            if field in update_data and update_data[field] is None:
                update_data.pop(field)
        if "image_urls" in update_data:
            urls = update_data["image_urls"]
            update_data["image_url"] = urls[0] if urls else None

        if not update_data:
            return recipe

        updated = await self.recipe_repo.update(recipe, update_data)
        self.logger.info(f"【菜谱】用户 {current_user.id} 更新了菜谱 {recipe_id}: {sorted(update_data)}")
        return updated

    async def delete_recipe(self, recipe_id: UUID, current_user: UserContext) -> None:
        """只有所有者可以删除，分享、评论、点赞、收藏在同一个事务里一起删除"""
        recipe, level = await self.load_with_access(recipe_id, current_user)
        recipe_policy.ensure_can_delete(level)
        await self.delete_recipes_cascade([recipe.id])
        self.logger.info(f"【菜谱】用户 {current_user.id} 删除了菜谱 {recipe_id}")

    async def admin_delete_recipe(self, recipe_id: UUID, current_user: UserContext) -> None:
        if not current_user.is_admin:
            raise PermissionDeniedException("需要管理员权限")
        recipe = await self.recipe_repo.get_by_id(recipe_id)
        if recipe is None:
            raise recipe_policy.not_found()
        await self.delete_recipes_cascade([recipe.id])
        self.logger.warning(f"【管理】管理员 {current_user.id} 删除了菜谱 {recipe_id}")

    async def delete_recipes_cascade(self, recipe_ids: Sequence[UUID]) -> None:
        recipe_ids = list(recipe_ids)
        if not recipe_ids:
            return
        async with self.factory.atomic():
            await self.share_repo.delete_for_recipes(recipe_ids)
            await self.comment_repo.delete_for_recipes(recipe_ids)
            await self.like_repo.delete_for_recipes(recipe_ids)
            await self.favorite_repo.delete_for_recipes(recipe_ids)
            await self.recipe_repo.delete_where(Recipe.id.in_(recipe_ids))

    # ==========================
    # 列表
    # ==========================

    async def list_my_recipes(
            self,
            current_user: UserContext,
            status: Optional[RecipeStatus] = None,
            include_shared: bool = False,
    ) -> DashboardRead:
        owned = await self.recipe_repo.list_owned(current_user.id, status)
        shared: List[RecipeWithOwnerRead] = []
        if include_shared:
            rows = await self.recipe_repo.list_shared_with(current_user.id, status)
            shared = [to_owner_read(recipe, owner) for recipe, owner in rows]
        return DashboardRead(
            owned=[RecipeRead.model_validate(r) for r in owned],
            shared=shared,
        )

    async def list_public(
            self,
            current_user: UserContext,
            q: Optional[str] = None,
            cuisine: Optional[str] = None,
    ) -> List[RecipeWithOwnerRead]:
        rows = await self.recipe_repo.list_public(current_user.id, _clean(q), _clean(cuisine))
        return [to_owner_read(recipe, owner) for recipe, owner in rows]

    async def search_recipes(
            self,
            current_user: UserContext,
            q: Optional[str] = None,
            cuisine: Optional[str] = None,
            prep_max: Optional[int] = None,
            include_shared: bool = True,
    ) -> List[RecipeSearchRead]:
        rows = await self.recipe_repo.search(
            current_user.id,
            q=_clean(q),
            cuisine=_clean(cuisine),
            prep_max=prep_max,
            include_shared=include_shared,
        )
        return [
            RecipeSearchRead(
                **to_owner_read(recipe, owner).model_dump(),
                like_count=like_count,
                favorite_count=favorite_count,
            )
            for recipe, owner, like_count, favorite_count in rows
        ]


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None
