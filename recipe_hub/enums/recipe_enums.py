from enum import Enum


class RecipeStatus(str, Enum):
    """菜谱在用户自己的菜谱本中的状态"""
    FAVORITE = "FAVORITE"
    TO_TRY = "TO_TRY"
    MADE_BEFORE = "MADE_BEFORE"
