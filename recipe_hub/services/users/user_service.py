from typing import Optional
from uuid import UUID

from recipe_hub.core.exceptions import UserNotFoundException
from recipe_hub.core.security.password_utils import get_password_hash
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.enums.user_enums import UserRole
from recipe_hub.models.user import User
from recipe_hub.repo.crud.recipes.recipe_repo import RecipeRepository
from recipe_hub.repo.crud.users.user_repo import UserRepository
from recipe_hub.schemas.recipes.recipe_schemas import RecipeRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.schemas.users.user_schemas import UserUpdateProfile, UserProfileRead, UserSummary
from recipe_hub.services._base_service import BaseService


class UserService(BaseService):
    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.user_repo: UserRepository = factory.get_repo_by_type(UserRepository)
        self.recipe_repo: RecipeRepository = factory.get_repo_by_type(RecipeRepository)

    async def get_user_context(self, user_id: UUID) -> Optional[UserContext]:
        """给身份层用：按 token 里的 sub 取回用户"""
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            return None
        return UserContext.model_validate(user)

    async def get_user(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException()
        return user

    async def update_profile(self, current_user: UserContext, profile_in: UserUpdateProfile) -> User:
        user = await self.get_user(current_user.id)
        update_data = profile_in.model_dump(exclude_unset=True)
        if not update_data:
            return user
        return await self.user_repo.update(user, update_data)

    async def get_user_profile(self, user_id: UUID) -> UserProfileRead:
        """公开主页：只展示公开菜谱"""
        user = await self.get_user(user_id)
        recipes = await self.recipe_repo.list_public_by_owner(user.id)
        return UserProfileRead(
            user=UserSummary.model_validate(user),
            recipes=[RecipeRead.model_validate(r) for r in recipes],
        )

    async def ensure_admin(self, email: str, password: str) -> User:
        """
        创建管理员账号。
        邮箱已被注册时提升为管理员，并把密码重置为配置的密码、解除禁用，
        这样提前抢注该邮箱的人拿不到管理员权限。
        """
        email = email.strip().lower()
        hashed_password = get_password_hash(password)
        user = await self.user_repo.get_by_email(email)
        if user is None:
            user = await self.user_repo.create({
                "email": email,
                "hashed_password": hashed_password,
                "role": UserRole.ADMIN,
                "name": "Admin",
            })
            self.logger.info(f"🛠️ 已创建管理员账号: {email}")
            return user

        user = await self.user_repo.update(user, {
            "role": UserRole.ADMIN,
            "hashed_password": hashed_password,
            "disabled": False,
        })
        self.logger.warning(f"🛠️ 已将用户 {email} 设为管理员并重置密码")
        return user
