from typing import List

from fastapi import APIRouter, Depends

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_reaction_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.recipes.recipe_schemas import RecipeWithOwnerRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.recipes.reaction_service import ReactionService

router = APIRouter()


@router.get("", response_model=StandardResponse[List[RecipeWithOwnerRead]])
async def list_favorites(
    service: ReactionService = Depends(get_reaction_service),
    current_user: UserContext = Depends(require_login),
):
    """我的收藏，最新收藏的在前；已经看不到的菜谱不会出现"""
    return response_success(data=await service.list_favorites(current_user))
