# recipe_hub/core/permissions/recipes_permission.py

from recipe_hub.core.exceptions import NotFoundException, PermissionDeniedException
from recipe_hub.core.permissions import recipe_access
from recipe_hub.core.permissions.recipe_access import AccessLevel
from recipe_hub.core.response_codes import ResponseCodeEnum


class RecipePolicy:
    """
    专门负责处理“菜谱”权限的策略类。
    把访问级别翻译成异常：看不到的一律当作不存在，看得到但权限不够的才是 403。
    """
    ENTITY_NAME = "菜谱"

    def not_found(self) -> NotFoundException:
        return NotFoundException(f"{self.ENTITY_NAME}不存在", ResponseCodeEnum.RECIPE_NOT_FOUND)

    def ensure_can_view(self, level: AccessLevel) -> None:
        if not recipe_access.can_view(level):
            raise self.not_found()

    def ensure_can_edit(self, level: AccessLevel) -> None:
        self.ensure_can_view(level)
        if not recipe_access.can_edit(level):
            raise PermissionDeniedException(f"你没有权限编辑此{self.ENTITY_NAME}")

    def ensure_can_delete(self, level: AccessLevel) -> None:
        self.ensure_can_view(level)
        if not recipe_access.can_delete(level):
            raise PermissionDeniedException(f"只有所有者可以删除此{self.ENTITY_NAME}")

    def ensure_owner(self, level: AccessLevel) -> None:
        """
        分享管理只对所有者开放；非所有者（即使能看到）也按不存在处理。
        """
        if level != AccessLevel.OWNER:
            raise self.not_found()


# 创建一个单例，方便 Service 层直接调用
recipe_policy = RecipePolicy()
