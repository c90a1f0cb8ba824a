# recipe_hub/models/__init__.py

# === 用户模块 ===
from recipe_hub.models.user import User

# === 菜谱模块 ===
from recipe_hub.models.recipe import (
    Recipe,
    RecipeShare,
    RecipeComment,
    RecipeLike,
    RecipeFavorite,
)

# === 社交模块 ===
from recipe_hub.models.social import (
    Friend,
    FriendRequest,
    Notification,
)
