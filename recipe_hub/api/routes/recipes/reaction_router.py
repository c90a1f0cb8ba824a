from uuid import UUID

from fastapi import APIRouter, Depends

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_reaction_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.recipes.reaction_schemas import LikeStatusRead, FavoriteStatusRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.recipes.reaction_service import ReactionService

router = APIRouter()


# === 点赞 ===
@router.get("/{recipe_id}/likes", response_model=StandardResponse[LikeStatusRead])
async def like_status(
    recipe_id: UUID,
    service: ReactionService = Depends(get_reaction_service),
    current_user: UserContext = Depends(require_login),
):
    return response_success(data=await service.like_status(recipe_id, current_user))


@router.post("/{recipe_id}/likes", response_model=StandardResponse[LikeStatusRead])
async def like_recipe(
    recipe_id: UUID,
    service: ReactionService = Depends(get_reaction_service),
    current_user: UserContext = Depends(require_login),
):
    return response_success(data=await service.like(recipe_id, current_user))


@router.delete("/{recipe_id}/likes", response_model=StandardResponse[LikeStatusRead])
async def unlike_recipe(
    recipe_id: UUID,
    service: ReactionService = Depends(get_reaction_service),
    current_user: UserContext = Depends(require_login),
):
    return response_success(data=await service.unlike(recipe_id, current_user))


# === 收藏 ===
@router.post("/{recipe_id}/favorite", response_model=StandardResponse[FavoriteStatusRead])
async def favorite_recipe(
    recipe_id: UUID,
    service: ReactionService = Depends(get_reaction_service),
    current_user: UserContext = Depends(require_login),
):
    return response_success(data=await service.favorite(recipe_id, current_user))


@router.delete("/{recipe_id}/favorite", response_model=StandardResponse[FavoriteStatusRead])
async def unfavorite_recipe(
    recipe_id: UUID,
    service: ReactionService = Depends(get_reaction_service),
    current_user: UserContext = Depends(require_login),
):
    return response_success(data=await service.unfavorite(recipe_id, current_user))
