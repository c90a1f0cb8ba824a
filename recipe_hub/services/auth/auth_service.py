from recipe_hub.core.exceptions import (
    InvalidCredentialsException,
    UserAlreadyExistsException,
    UserDisabledException,
)
from recipe_hub.core.security.jwt_utils import create_access_token
from recipe_hub.core.security.password_utils import get_password_hash, verify_password_or_fake
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.models.user import User
from recipe_hub.repo.crud.users.user_repo import UserRepository
from recipe_hub.schemas.users.user_schemas import UserRegister, UserLogin, TokenRead
from recipe_hub.services._base_service import BaseService


class AuthService(BaseService):
    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.user_repo: UserRepository = factory.get_repo_by_type(UserRepository)

    async def register_user(self, user_in: UserRegister) -> User:
        email = str(user_in.email).strip().lower()
        if await self.user_repo.get_by_email(email):
            raise UserAlreadyExistsException("该邮箱已被注册")

        user_data = user_in.model_dump(exclude={"password"})
        user_data["email"] = email
        user_data["hashed_password"] = get_password_hash(user_in.password)

        user = await self.user_repo.create(user_data)
        self.logger.info(f"【注册】新用户 {user.id} ({email})")
        return user

    async def login_user(self, login_in: UserLogin) -> TokenRead:
        """
        邮箱或密码错误统一返回 InvalidCredentials，不暴露邮箱是否已注册。
        """
        user = await self.user_repo.get_by_email(str(login_in.email))
        hashed = user.hashed_password if user else None
        if not verify_password_or_fake(login_in.password, hashed):
            self.logger.warning(f"【登录】失败: {login_in.email}")
            raise InvalidCredentialsException()
        if user.disabled:
            raise UserDisabledException()

        access_token, expires_delta, _ = create_access_token({"sub": str(user.id)})
        return TokenRead(
            access_token=access_token,
            token_type="bearer",
            expires_in=int(expires_delta.total_seconds()),
        )
