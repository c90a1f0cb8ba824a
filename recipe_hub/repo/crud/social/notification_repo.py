from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import desc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.models.social import Notification
from recipe_hub.models.user import User
from recipe_hub.repo.crud.common.base_repo import BaseRepository


class NotificationRepository(BaseRepository[Notification, BaseModel, BaseModel]):
    def __init__(self, db: AsyncSession, context: Optional[Dict[str, Any]] = None):
        super().__init__(db=db, model=Notification, context=context)

    async def list_for_recipient(self, to_user_id: UUID, limit: int) -> List[Tuple[Notification, Optional[User]]]:
        stmt = (
            select(Notification, User)
            .outerjoin(User, User.id == Notification.from_user_id)
            .where(Notification.to_user_id == to_user_id)
            .order_by(desc(Notification.created_at))
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [(notification, sender) for notification, sender in result.all()]

    async def get_for_recipient(self, notification_id: UUID, to_user_id: UUID) -> Optional[Notification]:
        stmt = self._base_stmt().where(
            Notification.id == notification_id,
            Notification.to_user_id == to_user_id,
        )
        return await self._run_and_scalar(stmt, "get_for_recipient")

    async def delete_involving_user(self, user_id: UUID) -> int:
        return await self.delete_where(
            or_(Notification.to_user_id == user_id, Notification.from_user_id == user_id)
        )
