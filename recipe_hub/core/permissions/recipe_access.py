# recipe_hub/core/permissions/recipe_access.py
"""
菜谱访问控制的核心判定。

`evaluate_access` 是纯函数，不做任何 I/O；列表查询里使用的 SQL 可见性条件
（见 RecipeRepository.visible_to）必须与这里的规则 1-4 保持一致。
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Protocol
from uuid import UUID


class AccessLevel(IntEnum):
    NO_ACCESS = 0
    VIEW_ONLY = 1
    VIEW_AND_EDIT = 2
    OWNER = 3


class ShareGrant(Protocol):
    can_edit: bool


@dataclass(frozen=True)
class ShareInfo:
    """只携带判定需要的字段，方便在没有 ORM 对象的地方构造"""
    can_edit: bool = False


def evaluate_access(
        owner_id: UUID,
        is_public: bool,
        share: Optional[ShareGrant],
        caller_id: UUID,
) -> AccessLevel:
    """
    计算调用者对一个菜谱的访问级别，规则按顺序匹配，先命中者生效：

    1. 调用者就是所有者 -> OWNER
    2. 存在分享记录且可编辑 -> VIEW_AND_EDIT
    3. 存在分享记录 -> VIEW_ONLY
    4. 菜谱公开 -> VIEW_ONLY
    5. 其他 -> NO_ACCESS

    share 只能是“分享给 caller 的那条记录”，或 None。
    """
    if caller_id == owner_id:
        return AccessLevel.OWNER
    if share is not None:
        return AccessLevel.VIEW_AND_EDIT if share.can_edit else AccessLevel.VIEW_ONLY
    if is_public:
        return AccessLevel.VIEW_ONLY
    return AccessLevel.NO_ACCESS


def can_view(level: AccessLevel) -> bool:
    return level != AccessLevel.NO_ACCESS


def can_edit(level: AccessLevel) -> bool:
    return level in (AccessLevel.VIEW_AND_EDIT, AccessLevel.OWNER)


def can_delete(level: AccessLevel) -> bool:
    return level == AccessLevel.OWNER
