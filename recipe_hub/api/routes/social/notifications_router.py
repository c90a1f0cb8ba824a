from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_notification_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.social.notification_schemas import NotificationRead, NotificationUpdate
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.social.notification_service import NotificationService

router = APIRouter()


@router.get("", response_model=StandardResponse[List[NotificationRead]])
async def list_notifications(
    service: NotificationService = Depends(get_notification_service),
    current_user: UserContext = Depends(require_login),
):
    return response_success(data=await service.list_notifications(current_user))


@router.patch("/{notification_id}", response_model=StandardResponse[NotificationRead])
async def update_notification(
    notification_id: UUID,
    update_in: NotificationUpdate,
    service: NotificationService = Depends(get_notification_service),
    current_user: UserContext = Depends(require_login),
):
    notification = await service.mark_read(notification_id, current_user, read=update_in.read)
    return response_success(data=notification)
