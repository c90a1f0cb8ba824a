from typing import List
from uuid import UUID

from recipe_hub.core.exceptions import NotFoundException, PermissionDeniedException, UserNotFoundException
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.models.user import User
from recipe_hub.repo.crud.recipes.comment_repo import RecipeCommentRepository
from recipe_hub.repo.crud.recipes.reaction_repo import RecipeLikeRepository, RecipeFavoriteRepository
from recipe_hub.repo.crud.recipes.recipe_repo import RecipeRepository
from recipe_hub.repo.crud.recipes.share_repo import RecipeShareRepository
from recipe_hub.repo.crud.social.friend_repo import FriendRepository
from recipe_hub.repo.crud.social.friend_request_repo import FriendRequestRepository
from recipe_hub.repo.crud.social.notification_repo import NotificationRepository
from recipe_hub.repo.crud.users.user_repo import UserRepository
from recipe_hub.schemas.recipes.comment_schemas import AdminCommentRead
from recipe_hub.schemas.recipes.recipe_schemas import AdminRecipeRead, RecipeOwnerSummary
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.schemas.users.user_schemas import AdminUserRead, UserSummary
from recipe_hub.services._base_service import BaseService
from recipe_hub.services.recipes.recipe_service import RecipeService


class AdminService(BaseService):
    """
    管理后台。所有操作都要求调用者是管理员；
    管理员不能修改或删除其他管理员，但可以操作自己。
    """

    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.recipe_service = RecipeService(factory)
        self.user_repo: UserRepository = factory.get_repo_by_type(UserRepository)
        self.recipe_repo: RecipeRepository = factory.get_repo_by_type(RecipeRepository)
        self.share_repo: RecipeShareRepository = factory.get_repo_by_type(RecipeShareRepository)
        self.comment_repo: RecipeCommentRepository = factory.get_repo_by_type(RecipeCommentRepository)
        self.like_repo: RecipeLikeRepository = factory.get_repo_by_type(RecipeLikeRepository)
        self.favorite_repo: RecipeFavoriteRepository = factory.get_repo_by_type(RecipeFavoriteRepository)
        self.friend_repo: FriendRepository = factory.get_repo_by_type(FriendRepository)
        self.request_repo: FriendRequestRepository = factory.get_repo_by_type(FriendRequestRepository)
        self.notification_repo: NotificationRepository = factory.get_repo_by_type(NotificationRepository)

    @staticmethod
    def _ensure_admin(current_user: UserContext) -> None:
        if not current_user.is_admin:
            raise PermissionDeniedException("需要管理员权限")

    async def _get_modifiable_user(self, user_id: UUID, current_user: UserContext) -> User:
        self._ensure_admin(current_user)
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException()
        if user.is_admin and user.id != current_user.id:
            raise PermissionDeniedException("不能修改其他管理员")
        return user

    # ==========================
    # 用户
    # ==========================

    async def list_users(self, current_user: UserContext) -> List[AdminUserRead]:
        self._ensure_admin(current_user)
        rows = await self.user_repo.list_with_recipe_counts()
        return [
            AdminUserRead(
                **UserSummary.model_validate(user).model_dump(),
                role=user.role,
                disabled=user.disabled,
                created_at=user.created_at,
                recipe_count=recipe_count or 0,
            )
            for user, recipe_count in rows
        ]

    async def set_user_disabled(self, user_id: UUID, disabled: bool, current_user: UserContext) -> User:
        user = await self._get_modifiable_user(user_id, current_user)
        user = await self.user_repo.update(user, {"disabled": disabled})
        self.logger.warning(f"【管理】管理员 {current_user.id} 将用户 {user_id} 的 disabled 设为 {disabled}")
        return user

    async def delete_user(self, user_id: UUID, current_user: UserContext) -> None:
        """
        删除用户及其所有数据：自己的菜谱（连同上面的分享、评论、点赞、收藏）、
        别人分享给他的记录、他的评论/点赞/收藏、好友关系、好友请求、通知。
        """
        user = await self._get_modifiable_user(user_id, current_user)

        async with self.factory.atomic():
            owned = await self.recipe_repo.list_owned(user.id)
            await self.recipe_service.delete_recipes_cascade([r.id for r in owned])

            await self.share_repo.delete_involving_user(user.id)
            await self.comment_repo.delete_by_user(user.id)
            await self.like_repo.delete_by_user(user.id)
            await self.favorite_repo.delete_by_user(user.id)
            await self.friend_repo.delete_involving_user(user.id)
            await self.request_repo.delete_involving_user(user.id)
            await self.notification_repo.delete_involving_user(user.id)
            await self.user_repo.delete(user)

        self.logger.warning(f"【管理】管理员 {current_user.id} 删除了用户 {user_id}（{len(owned)} 个菜谱）")

    # ==========================
    # 菜谱
    # ==========================

    async def list_recipes(self, current_user: UserContext) -> List[AdminRecipeRead]:
        self._ensure_admin(current_user)
        rows = await self.recipe_repo.list_with_counts()
        return [
            AdminRecipeRead(
                id=recipe.id,
                name=recipe.name,
                is_public=recipe.is_public,
                created_at=recipe.created_at,
                owner=RecipeOwnerSummary.model_validate(owner) if owner is not None else None,
                comment_count=comment_count or 0,
                like_count=like_count or 0,
            )
            for recipe, owner, comment_count, like_count in rows
        ]

    async def delete_recipe(self, recipe_id: UUID, current_user: UserContext) -> None:
        await self.recipe_service.admin_delete_recipe(recipe_id, current_user)

    # ==========================
    # 评论
    # ==========================

    async def list_comments(self, current_user: UserContext) -> List[AdminCommentRead]:
        self._ensure_admin(current_user)
        rows = await self.comment_repo.list_latest(self.settings.listing.admin_comments_limit)
        return [
            AdminCommentRead(
                id=comment.id,
                recipe_id=comment.recipe_id,
                text=comment.text,
                created_at=comment.created_at,
                user=UserSummary.model_validate(author),
                recipe_name=recipe.name,
            )
            for comment, author, recipe in rows
        ]

    async def delete_comment(self, comment_id: UUID, current_user: UserContext) -> None:
        self._ensure_admin(current_user)
        comment = await self.comment_repo.get_by_id(comment_id)
        if comment is None:
            raise NotFoundException("评论不存在")
        await self.comment_repo.delete(comment)
        self.logger.warning(f"【管理】管理员 {current_user.id} 删除了评论 {comment_id}")
