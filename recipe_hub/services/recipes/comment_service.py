from typing import List
from uuid import UUID

from recipe_hub.core.exceptions import InvalidArgumentException, NotFoundException, PermissionDeniedException
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.repo.crud.recipes.comment_repo import RecipeCommentRepository
from recipe_hub.repo.crud.users.user_repo import UserRepository
from recipe_hub.schemas.recipes.comment_schemas import CommentRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.schemas.users.user_schemas import UserSummary
from recipe_hub.services.recipes.recipe_access_service import RecipeAccessService

MAX_COMMENT_LENGTH = 2000


class CommentService(RecipeAccessService):
    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.comment_repo: RecipeCommentRepository = factory.get_repo_by_type(RecipeCommentRepository)
        self.user_repo: UserRepository = factory.get_repo_by_type(UserRepository)

    async def list_comments(self, recipe_id: UUID, current_user: UserContext) -> List[CommentRead]:
        recipe = await self.load_viewable(recipe_id, current_user)
        rows = await self.comment_repo.list_for_recipe(recipe.id)
        return [
            CommentRead(
                id=comment.id,
                recipe_id=comment.recipe_id,
                text=comment.text,
                created_at=comment.created_at,
                user=UserSummary.model_validate(author),
            )
            for comment, author in rows
        ]

    async def add_comment(self, recipe_id: UUID, text: str, current_user: UserContext) -> CommentRead:
        recipe = await self.load_viewable(recipe_id, current_user)

        text = (text or "").strip()
        if not 1 <= len(text) <= MAX_COMMENT_LENGTH:
            raise InvalidArgumentException(f"评论长度必须在 1 到 {MAX_COMMENT_LENGTH} 个字符之间")

        comment = await self.comment_repo.create(
            {"recipe_id": recipe.id, "user_id": current_user.id, "text": text}
        )
        author = await self.user_repo.get_by_id(current_user.id)
        return CommentRead(
            id=comment.id,
            recipe_id=comment.recipe_id,
            text=comment.text,
            created_at=comment.created_at,
            user=UserSummary.model_validate(author),
        )

    async def delete_comment(self, recipe_id: UUID, comment_id: UUID, current_user: UserContext) -> None:
        """只能删除自己的评论；评论不属于该菜谱时按不存在处理"""
        recipe = await self.load_viewable(recipe_id, current_user)
        comment = await self.comment_repo.get_on_recipe(comment_id, recipe.id)
        if comment is None:
            raise NotFoundException("评论不存在")
        if comment.user_id != current_user.id:
            raise PermissionDeniedException("只能删除自己的评论")
        await self.comment_repo.delete(comment)
