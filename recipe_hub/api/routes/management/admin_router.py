# recipe_hub/api/routes/management/admin_router.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from recipe_hub.api.dependencies.permissions import require_admin
from recipe_hub.api.dependencies.services import get_admin_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.recipes.comment_schemas import AdminCommentRead
from recipe_hub.schemas.recipes.recipe_schemas import AdminRecipeRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.schemas.users.user_schemas import AdminUserRead, AdminUserUpdate, UserRead
from recipe_hub.services.admin.admin_service import AdminService

# 整个路由只对管理员开放
router = APIRouter()


# ==========================
# 👤 用户
# ==========================
@router.get("/users", response_model=StandardResponse[List[AdminUserRead]], summary="[管理员] 用户列表")
async def list_users(
    service: AdminService = Depends(get_admin_service),
    current_user: UserContext = Depends(require_admin),
):
    return response_success(data=await service.list_users(current_user))


@router.patch("/users/{user_id}", response_model=StandardResponse[UserRead], summary="[管理员] 启用/禁用用户")
async def update_user(
    user_id: UUID,
    update_in: AdminUserUpdate,
    service: AdminService = Depends(get_admin_service),
    current_user: UserContext = Depends(require_admin),
):
    user = await service.set_user_disabled(user_id, update_in.disabled, current_user)
    return response_success(data=UserRead.model_validate(user))


@router.delete("/users/{user_id}", response_model=StandardResponse[None], summary="[管理员] 删除用户（高危）")
async def delete_user(
    user_id: UUID,
    service: AdminService = Depends(get_admin_service),
    current_user: UserContext = Depends(require_admin),
):
    """删除用户以及他的全部菜谱、评论、点赞、收藏和社交关系，不可恢复。"""
    await service.delete_user(user_id, current_user)
    return response_success(message="用户已删除")


# ==========================
# 🍳 菜谱
# ==========================
@router.get("/recipes", response_model=StandardResponse[List[AdminRecipeRead]], summary="[管理员] 菜谱列表")
async def list_recipes(
    service: AdminService = Depends(get_admin_service),
    current_user: UserContext = Depends(require_admin),
):
    return response_success(data=await service.list_recipes(current_user))


@router.delete("/recipes/{recipe_id}", response_model=StandardResponse[None], summary="[管理员] 删除菜谱")
async def delete_recipe(
    recipe_id: UUID,
    service: AdminService = Depends(get_admin_service),
    current_user: UserContext = Depends(require_admin),
):
    await service.delete_recipe(recipe_id, current_user)
    return response_success(message="菜谱已删除")


# ==========================
# 💬 评论
# ==========================
@router.get("/comments", response_model=StandardResponse[List[AdminCommentRead]], summary="[管理员] 最新评论")
async def list_comments(
    service: AdminService = Depends(get_admin_service),
    current_user: UserContext = Depends(require_admin),
):
    return response_success(data=await service.list_comments(current_user))


@router.delete("/comments/{comment_id}", response_model=StandardResponse[None], summary="[管理员] 删除评论")
async def delete_comment(
    comment_id: UUID,
    service: AdminService = Depends(get_admin_service),
    current_user: UserContext = Depends(require_admin),
):
    await service.delete_comment(comment_id, current_user)
    return response_success(message="评论已删除")
