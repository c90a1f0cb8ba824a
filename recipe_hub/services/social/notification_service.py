from typing import List, Optional
from uuid import UUID

from recipe_hub.core.exceptions import NotFoundException
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.repo.crud.social.notification_repo import NotificationRepository
from recipe_hub.schemas.social.notification_schemas import NotificationRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.schemas.users.user_schemas import UserSummary
from recipe_hub.services._base_service import BaseService


def _to_read(notification, sender) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        type=notification.type,
        read=notification.read,
        created_at=notification.created_at,
        from_user=UserSummary.model_validate(sender) if sender is not None else None,
    )


class NotificationService(BaseService):
    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.notification_repo: NotificationRepository = factory.get_repo_by_type(NotificationRepository)

    async def list_notifications(self, current_user: UserContext) -> List[NotificationRead]:
        rows = await self.notification_repo.list_for_recipient(
            current_user.id, self.settings.listing.notifications_limit
        )
        return [_to_read(notification, sender) for notification, sender in rows]

    async def mark_read(
            self,
            notification_id: UUID,
            current_user: UserContext,
            read: Optional[bool] = True,
    ) -> NotificationRead:
        """只有接收方可以修改；只支持标记为已读"""
        notification = await self.notification_repo.get_for_recipient(notification_id, current_user.id)
        if notification is None:
            raise NotFoundException("通知不存在")

        if read is True and not notification.read:
            notification = await self.notification_repo.update(notification, {"read": True})

        return NotificationRead(
            id=notification.id,
            type=notification.type,
            read=notification.read,
            created_at=notification.created_at,
        )
