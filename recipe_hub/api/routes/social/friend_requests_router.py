from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_friend_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.social.friend_schemas import FriendRequestRead, FriendshipStatusRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.social.friend_service import FriendService

router = APIRouter()


@router.get("", response_model=StandardResponse[List[FriendRequestRead]])
async def list_incoming_requests(
    service: FriendService = Depends(get_friend_service),
    current_user: UserContext = Depends(require_login),
):
    """收到的好友请求，最新的在前"""
    return response_success(data=await service.list_incoming_requests(current_user))


@router.get("/status", response_model=StandardResponse[FriendshipStatusRead])
async def friendship_status(
    user_id: UUID = Query(..., description="对方用户 ID"),
    service: FriendService = Depends(get_friend_service),
    current_user: UserContext = Depends(require_login),
):
    return response_success(data=await service.friendship_status(current_user, user_id))


@router.post("/{request_id}/accept", response_model=StandardResponse[None])
async def accept_request(
    request_id: UUID,
    service: FriendService = Depends(get_friend_service),
    current_user: UserContext = Depends(require_login),
):
    await service.accept_request(request_id, current_user)
    return response_success(message="已接受好友请求")


@router.post("/{request_id}/decline", response_model=StandardResponse[None])
async def decline_request(
    request_id: UUID,
    service: FriendService = Depends(get_friend_service),
    current_user: UserContext = Depends(require_login),
):
    await service.decline_request(request_id, current_user)
    return response_success(message="已拒绝好友请求")
