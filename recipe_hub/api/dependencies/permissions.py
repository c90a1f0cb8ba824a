# recipe_hub/api/dependencies/permissions.py

from fastapi import Depends

from recipe_hub.core.exceptions import PermissionDeniedException
from recipe_hub.core.security.security import get_current_user
from recipe_hub.schemas.users.user_context import UserContext


def require_login(current_user: UserContext = Depends(get_current_user)) -> UserContext:
    """
    一个基础的依赖，仅确保用户已登录。
    可用于所有需要用户登录但没有特定角色要求的接口。
    """
    return current_user


def require_admin(current_user: UserContext = Depends(get_current_user)) -> UserContext:
    """
    确保当前用户是管理员 (role=ADMIN)，用于保护 /admin 下的所有接口。
    """
    if not current_user.is_admin:
        raise PermissionDeniedException("操作失败：需要管理员权限")
    return current_user
