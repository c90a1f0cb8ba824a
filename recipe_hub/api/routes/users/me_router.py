from fastapi import APIRouter, Depends

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_user_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.schemas.users.user_schemas import UserUpdateProfile, UserRead
from recipe_hub.services.users.user_service import UserService

router = APIRouter()


@router.patch("/profile", response_model=StandardResponse[UserRead])
async def update_my_profile(
    profile_in: UserUpdateProfile,
    service: UserService = Depends(get_user_service),
    current_user: UserContext = Depends(require_login),
):
    user = await service.update_profile(current_user, profile_in)
    return response_success(data=UserRead.model_validate(user), message="资料已更新")
