# recipe_hub/api/dependencies/services.py
from fastapi import Depends

from recipe_hub.db.get_repo_factory import get_repository_factory
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.services.admin.admin_service import AdminService
from recipe_hub.services.auth.auth_service import AuthService
from recipe_hub.services.recipes.comment_service import CommentService
from recipe_hub.services.recipes.reaction_service import ReactionService
from recipe_hub.services.recipes.recipe_service import RecipeService
from recipe_hub.services.recipes.share_service import ShareService
from recipe_hub.services.social.friend_service import FriendService
from recipe_hub.services.social.notification_service import NotificationService
from recipe_hub.services.users.user_service import UserService


def get_auth_service(
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> AuthService:
    return AuthService(repo_factory)


def get_user_service(
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> UserService:
    return UserService(repo_factory)


def get_recipe_service(
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> RecipeService:
    return RecipeService(repo_factory)


def get_share_service(
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> ShareService:
    return ShareService(repo_factory)


def get_comment_service(
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> CommentService:
    return CommentService(repo_factory)


def get_reaction_service(
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> ReactionService:
    """点赞、收藏共用一个服务"""
    return ReactionService(repo_factory)


def get_friend_service(
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> FriendService:
    return FriendService(repo_factory)


def get_notification_service(
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> NotificationService:
    return NotificationService(repo_factory)


def get_admin_service(
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> AdminService:
    return AdminService(repo_factory)
