# recipe_hub/api/routes/recipes/recipes_router.py
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_recipe_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.enums.recipe_enums import RecipeStatus
from recipe_hub.schemas.recipes.recipe_schemas import (
    RecipeCreate,
    RecipeUpdate,
    RecipeRead,
    RecipeDetailRead,
    RecipeWithOwnerRead,
    RecipeSearchRead,
    DashboardRead,
)
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.recipes.recipe_service import RecipeService

router = APIRouter()


@router.get("", response_model=StandardResponse[DashboardRead])
async def list_my_recipes(
    status_filter: Optional[RecipeStatus] = Query(None, alias="status"),
    include_shared: bool = Query(False, description="同时返回分享给我的菜谱"),
    service: RecipeService = Depends(get_recipe_service),
    current_user: UserContext = Depends(require_login),
):
    dashboard = await service.list_my_recipes(current_user, status_filter, include_shared)
    return response_success(data=dashboard)


@router.post("", response_model=StandardResponse[RecipeRead], status_code=status.HTTP_201_CREATED)
async def create_recipe(
    recipe_in: RecipeCreate,
    service: RecipeService = Depends(get_recipe_service),
    current_user: UserContext = Depends(require_login),
):
    recipe = await service.create_recipe(recipe_in, current_user)
    return response_success(
        data=RecipeRead.model_validate(recipe),
        http_status=status.HTTP_201_CREATED,
        message="菜谱创建成功",
    )


# 静态路径要放在 /{recipe_id} 之前
@router.get("/public", response_model=StandardResponse[List[RecipeWithOwnerRead]])
async def list_public_recipes(
    q: Optional[str] = Query(None, description="按名称、做法、菜系、配料模糊搜索"),
    cuisine: Optional[str] = Query(None),
    service: RecipeService = Depends(get_recipe_service),
    current_user: UserContext = Depends(require_login),
):
    recipes = await service.list_public(current_user, q=q, cuisine=cuisine)
    return response_success(data=recipes)


@router.get("/search", response_model=StandardResponse[List[RecipeSearchRead]])
async def search_recipes(
    q: Optional[str] = Query(None),
    cuisine: Optional[str] = Query(None),
    prep_max: Optional[int] = Query(None, ge=0, description="准备时间上限（分钟）"),
    include_shared: bool = Query(True),
    service: RecipeService = Depends(get_recipe_service),
    current_user: UserContext = Depends(require_login),
):
    recipes = await service.search_recipes(
        current_user, q=q, cuisine=cuisine, prep_max=prep_max, include_shared=include_shared
    )
    return response_success(data=recipes)


@router.get("/{recipe_id}", response_model=StandardResponse[RecipeDetailRead])
async def get_recipe(
    recipe_id: UUID,
    service: RecipeService = Depends(get_recipe_service),
    current_user: UserContext = Depends(require_login),
):
    detail = await service.get_recipe_detail(recipe_id, current_user)
    return response_success(data=detail)


@router.patch("/{recipe_id}", response_model=StandardResponse[RecipeRead])
async def update_recipe(
    recipe_id: UUID,
    recipe_in: RecipeUpdate,
    service: RecipeService = Depends(get_recipe_service),
    current_user: UserContext = Depends(require_login),
):
    recipe = await service.update_recipe(recipe_id, recipe_in, current_user)
    return response_success(data=RecipeRead.model_validate(recipe), message="菜谱更新成功")


@router.delete("/{recipe_id}", response_model=StandardResponse[None])
async def delete_recipe(
    recipe_id: UUID,
    service: RecipeService = Depends(get_recipe_service),
    current_user: UserContext = Depends(require_login),
):
    await service.delete_recipe(recipe_id, current_user)
    return response_success(message="菜谱已删除")
