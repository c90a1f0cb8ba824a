# recipe_hub/core/security/security.py
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from recipe_hub.config.settings import settings
from recipe_hub.core.exceptions import InvalidTokenException, UnauthorizedException, UserDisabledException
from recipe_hub.core.security.jwt_utils import decode_token, validate_token_type
from recipe_hub.db.get_repo_factory import get_repository_factory
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.users.user_service import UserService

# auto_error=False：缺少 token 时由我们自己抛 UnauthorizedException，走统一的响应格式
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.server.api_prefix}/auth/login",
    auto_error=False,
)


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    repo_factory: RepositoryFactory = Depends(get_repository_factory),
) -> UserContext:
    """
    身份层：把 Bearer token 解析成 UserContext，之后的每个服务调用都显式接收它。
    """
    if not token:
        raise UnauthorizedException("未登录或缺少访问令牌")

    payload = decode_token(token)
    validate_token_type(payload, expected="access")

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenException(message="Token payload is missing user identifier (sub)")
    try:
        user_uuid = UUID(user_id)
    except ValueError:
        raise InvalidTokenException(message="Token subject is not a valid user id")

    user = await UserService(repo_factory).get_user_context(user_uuid)
    if user is None:
        raise InvalidTokenException(message="User not found")
    # 被禁用的用户即使持有未过期的 token 也不能继续访问
    if user.disabled:
        raise UserDisabledException()

    return user
