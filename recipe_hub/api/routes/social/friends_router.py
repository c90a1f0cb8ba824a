from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_friend_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.social.friend_schemas import FriendRead, FriendRequestCreate, FriendRequestSentRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.social.friend_service import FriendService

router = APIRouter()


@router.get("", response_model=StandardResponse[List[FriendRead]])
async def list_friends(
    service: FriendService = Depends(get_friend_service),
    current_user: UserContext = Depends(require_login),
):
    return response_success(data=await service.list_friends(current_user))


@router.post("", response_model=StandardResponse[FriendRequestSentRead], status_code=status.HTTP_201_CREATED)
async def send_friend_request(
    request_in: FriendRequestCreate,
    service: FriendService = Depends(get_friend_service),
    current_user: UserContext = Depends(require_login),
):
    sent = await service.send_request(
        current_user,
        user_id=request_in.user_id,
        email=str(request_in.email) if request_in.email else None,
    )
    return response_success(data=sent, http_status=status.HTTP_201_CREATED, message="好友请求已发送")


@router.delete("/{user_id}", response_model=StandardResponse[None])
async def remove_friend(
    user_id: UUID,
    service: FriendService = Depends(get_friend_service),
    current_user: UserContext = Depends(require_login),
):
    await service.remove_friend(current_user, user_id)
    return response_success(message="已删除好友")
