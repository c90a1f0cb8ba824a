from uuid import UUID

from fastapi import APIRouter, Depends

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_user_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.schemas.users.user_schemas import UserProfileRead
from recipe_hub.services.users.user_service import UserService

router = APIRouter()


@router.get("/{user_id}/profile", response_model=StandardResponse[UserProfileRead])
async def get_user_profile(
    user_id: UUID,
    service: UserService = Depends(get_user_service),
    current_user: UserContext = Depends(require_login),
):
    """公开主页，只包含对方的公开菜谱"""
    return response_success(data=await service.get_user_profile(user_id))
