from typing import Tuple
from uuid import UUID

from recipe_hub.core.exceptions import NotFoundException
from recipe_hub.core.permissions.recipe_access import AccessLevel, evaluate_access
from recipe_hub.core.permissions.recipes_permission import recipe_policy
from recipe_hub.core.response_codes import ResponseCodeEnum
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.models.recipe import Recipe
from recipe_hub.repo.crud.recipes.recipe_repo import RecipeRepository
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services._base_service import BaseService


class RecipeAccessService(BaseService):
    """
    所有“以某个菜谱为作用域”的服务的基类：先按调用者身份取回菜谱并算出访问级别。
    """

    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.recipe_repo: RecipeRepository = factory.get_repo_by_type(RecipeRepository)

    async def load_with_access(self, recipe_id: UUID, current_user: UserContext) -> Tuple[Recipe, AccessLevel]:
        """
        取回菜谱及调用者的访问级别。
        看不到的菜谱在查询里就被过滤掉，统一抛 NotFound。
        """
        found = await self.recipe_repo.get_visible_with_share(recipe_id, current_user.id)
        if found is None:
            raise NotFoundException("菜谱不存在", ResponseCodeEnum.RECIPE_NOT_FOUND)
        recipe, share = found
        level = evaluate_access(recipe.user_id, recipe.is_public, share, current_user.id)
        return recipe, level

    async def load_viewable(self, recipe_id: UUID, current_user: UserContext) -> Recipe:
        recipe, level = await self.load_with_access(recipe_id, current_user)
        recipe_policy.ensure_can_view(level)
        return recipe
