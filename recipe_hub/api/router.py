from fastapi import APIRouter

from recipe_hub.api.routes.auth import auth_router
from recipe_hub.api.routes.management import admin_router
from recipe_hub.api.routes.recipes import (
    recipes_router,
    share_router,
    comment_router,
    reaction_router,
    favorites_router,
)
from recipe_hub.api.routes.social import friends_router, friend_requests_router, notifications_router
from recipe_hub.api.routes.users import me_router, users_router

api_router = APIRouter()

# 将所有路由配置定义在一个列表中
# 每个元素都是一个包含 router, prefix, 和 tags 的字典
routers_to_include = [
    # auth routers
    {"router": auth_router.router, "prefix": "/auth", "tags": ["auth"]},

    # recipes routers（子资源路由共用 /recipes 前缀）
    {"router": recipes_router.router, "prefix": "/recipes", "tags": ["recipes"]},
    {"router": share_router.router, "prefix": "/recipes", "tags": ["shares"]},
    {"router": comment_router.router, "prefix": "/recipes", "tags": ["comments"]},
    {"router": reaction_router.router, "prefix": "/recipes", "tags": ["reactions"]},
    {"router": favorites_router.router, "prefix": "/favorites", "tags": ["reactions"]},

    # social routers
    {"router": friends_router.router, "prefix": "/friends", "tags": ["friends"]},
    {"router": friend_requests_router.router, "prefix": "/friend-requests", "tags": ["friends"]},
    {"router": notifications_router.router, "prefix": "/notifications", "tags": ["notifications"]},

    # user routers
    {"router": me_router.router, "prefix": "/me", "tags": ["users"]},
    {"router": users_router.router, "prefix": "/users", "tags": ["users"]},

    # management routers
    {"router": admin_router.router, "prefix": "/admin", "tags": ["admin"]},
]

# 使用一个循环来包含所有路由 ✨
for route_config in routers_to_include:
    api_router.include_router(**route_config)
