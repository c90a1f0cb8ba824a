from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_share_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.recipes.share_schemas import ShareCreate, ShareRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.recipes.share_service import ShareService

# 挂载在 /recipes 下：/recipes/{recipe_id}/share
router = APIRouter()


@router.get("/{recipe_id}/share", response_model=StandardResponse[List[ShareRead]])
async def list_shares(
    recipe_id: UUID,
    service: ShareService = Depends(get_share_service),
    current_user: UserContext = Depends(require_login),
):
    shares = await service.list_shares(recipe_id, current_user)
    return response_success(data=shares)


@router.post("/{recipe_id}/share", response_model=StandardResponse[ShareRead], status_code=status.HTTP_201_CREATED)
async def grant_share(
    recipe_id: UUID,
    share_in: ShareCreate,
    service: ShareService = Depends(get_share_service),
    current_user: UserContext = Depends(require_login),
):
    share = await service.grant_share(
        recipe_id, str(share_in.shared_with_email), share_in.can_edit, current_user
    )
    return response_success(data=share, http_status=status.HTTP_201_CREATED, message="分享成功")


@router.delete("/{recipe_id}/share", response_model=StandardResponse[None])
async def revoke_share(
    recipe_id: UUID,
    user_id: UUID = Query(..., description="取消分享的目标用户"),
    service: ShareService = Depends(get_share_service),
    current_user: UserContext = Depends(require_login),
):
    await service.revoke_share(recipe_id, user_id, current_user)
    return response_success(message="已取消分享")
