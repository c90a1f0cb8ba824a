from typing import List
from uuid import UUID

from recipe_hub.core.exceptions import InvalidArgumentException
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.repo.crud.recipes.reaction_repo import RecipeLikeRepository, RecipeFavoriteRepository
from recipe_hub.schemas.recipes.reaction_schemas import LikeStatusRead, FavoriteStatusRead
from recipe_hub.schemas.recipes.recipe_schemas import RecipeWithOwnerRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.recipes.recipe_access_service import RecipeAccessService
from recipe_hub.services.recipes.recipe_service import to_owner_read


class ReactionService(RecipeAccessService):
    """点赞与收藏。所有操作都要求调用者能看到该菜谱。"""

    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.like_repo: RecipeLikeRepository = factory.get_repo_by_type(RecipeLikeRepository)
        self.favorite_repo: RecipeFavoriteRepository = factory.get_repo_by_type(RecipeFavoriteRepository)

    # ==========================
    # 点赞
    # ==========================

    async def like_status(self, recipe_id: UUID, current_user: UserContext) -> LikeStatusRead:
        recipe = await self.load_viewable(recipe_id, current_user)
        return LikeStatusRead(
            count=await self.like_repo.count_for_recipe(recipe.id),
            liked=await self.like_repo.has(recipe.id, current_user.id),
        )

    async def like(self, recipe_id: UUID, current_user: UserContext) -> LikeStatusRead:
        recipe = await self.load_viewable(recipe_id, current_user)
        if recipe.user_id == current_user.id:
            raise InvalidArgumentException("不能给自己的菜谱点赞")
        await self.like_repo.add(recipe.id, current_user.id)
        return LikeStatusRead(count=await self.like_repo.count_for_recipe(recipe.id), liked=True)

    async def unlike(self, recipe_id: UUID, current_user: UserContext) -> LikeStatusRead:
        recipe = await self.load_viewable(recipe_id, current_user)
        await self.like_repo.remove(recipe.id, current_user.id)
        return LikeStatusRead(count=await self.like_repo.count_for_recipe(recipe.id), liked=False)

    # ==========================
    # 收藏
    # ==========================

    async def favorite(self, recipe_id: UUID, current_user: UserContext) -> FavoriteStatusRead:
        recipe = await self.load_viewable(recipe_id, current_user)
        await self.favorite_repo.add(recipe.id, current_user.id)
        return FavoriteStatusRead(favorited=True)

    async def unfavorite(self, recipe_id: UUID, current_user: UserContext) -> FavoriteStatusRead:
        recipe = await self.load_viewable(recipe_id, current_user)
        await self.favorite_repo.remove(recipe.id, current_user.id)
        return FavoriteStatusRead(favorited=False)

    async def list_favorites(self, current_user: UserContext) -> List[RecipeWithOwnerRead]:
        rows = await self.favorite_repo.list_visible_for(current_user.id)
        return [to_owner_read(recipe, owner) for recipe, owner in rows]
