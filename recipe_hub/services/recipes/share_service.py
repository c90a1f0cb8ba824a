from typing import List
from uuid import UUID

from recipe_hub.core.exceptions import InvalidArgumentException, UserNotFoundException
from recipe_hub.core.permissions.recipes_permission import recipe_policy
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.repo.crud.recipes.share_repo import RecipeShareRepository
from recipe_hub.repo.crud.users.user_repo import UserRepository
from recipe_hub.schemas.recipes.share_schemas import ShareRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.recipes.recipe_access_service import RecipeAccessService


class ShareService(RecipeAccessService):
    """
    菜谱分享目录：只有所有者可以授予、撤销、查看分享。
    非所有者（包括被分享的人）一律得到 NotFound。
    """

    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.share_repo: RecipeShareRepository = factory.get_repo_by_type(RecipeShareRepository)
        self.user_repo: UserRepository = factory.get_repo_by_type(UserRepository)

    async def _ensure_owner(self, recipe_id: UUID, current_user: UserContext):
        recipe, level = await self.load_with_access(recipe_id, current_user)
        recipe_policy.ensure_owner(level)
        return recipe

    async def grant_share(
            self,
            recipe_id: UUID,
            target_email: str,
            can_edit: bool,
            current_user: UserContext,
    ) -> ShareRead:
        recipe = await self._ensure_owner(recipe_id, current_user)

        target = await self.user_repo.get_by_email(target_email)
        if target is None:
            raise UserNotFoundException("没有使用该邮箱的用户")
        if target.id == current_user.id:
            raise InvalidArgumentException("不能把菜谱分享给自己")

        share = await self.share_repo.grant(recipe.id, current_user.id, target.id, can_edit)
        self.logger.info(
            f"【分享】菜谱 {recipe.id} 已分享给 {target.id}，can_edit={can_edit}"
        )
        return ShareRead(
            id=share.id,
            recipe_id=share.recipe_id,
            shared_with_id=target.id,
            shared_with_email=target.email,
            shared_with_name=target.name,
            can_edit=share.can_edit,
            created_at=share.created_at,
        )

    async def revoke_share(self, recipe_id: UUID, target_user_id: UUID, current_user: UserContext) -> None:
        """幂等：没有对应分享时也视为成功"""
        recipe = await self._ensure_owner(recipe_id, current_user)
        removed = await self.share_repo.revoke(recipe.id, target_user_id)
        self.logger.info(f"【分享】菜谱 {recipe.id} 撤销对 {target_user_id} 的分享，删除 {removed} 条")

    async def list_shares(self, recipe_id: UUID, current_user: UserContext) -> List[ShareRead]:
        recipe = await self._ensure_owner(recipe_id, current_user)
        rows = await self.share_repo.list_for_recipe(recipe.id)
        return [
            ShareRead(
                id=share.id,
                recipe_id=share.recipe_id,
                shared_with_id=user.id,
                shared_with_email=user.email,
                shared_with_name=user.name,
                can_edit=share.can_edit,
                created_at=share.created_at,
            )
            for share, user in rows
        ]
