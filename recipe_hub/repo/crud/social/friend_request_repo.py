from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import and_, desc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.models.social import FriendRequest
from recipe_hub.models.user import User
from recipe_hub.repo.crud.common.base_repo import BaseRepository
from recipe_hub.schemas.social.friend_schemas import FriendRequestCreate


class FriendRequestRepository(BaseRepository[FriendRequest, FriendRequestCreate, BaseModel]):
    def __init__(self, db: AsyncSession, context: Optional[Dict[str, Any]] = None):
        super().__init__(db=db, model=FriendRequest, context=context)

    async def find_directed(self, from_user_id: UUID, to_user_id: UUID) -> Optional[FriendRequest]:
        stmt = self._base_stmt().where(
            FriendRequest.from_user_id == from_user_id,
            FriendRequest.to_user_id == to_user_id,
        )
        return await self._run_and_scalar(stmt, "find_directed")

    async def pending_between(self, a: UUID, b: UUID) -> bool:
        """任一方向上存在未处理的请求"""
        return await self.exists(
            or_(
                and_(FriendRequest.from_user_id == a, FriendRequest.to_user_id == b),
                and_(FriendRequest.from_user_id == b, FriendRequest.to_user_id == a),
            )
        )

    async def get_for_recipient(self, request_id: UUID, to_user_id: UUID) -> Optional[FriendRequest]:
        stmt = self._base_stmt().where(
            FriendRequest.id == request_id,
            FriendRequest.to_user_id == to_user_id,
        )
        return await self._run_and_scalar(stmt, "get_for_recipient")

    async def list_incoming(self, to_user_id: UUID) -> List[Tuple[FriendRequest, User]]:
        """收到的好友请求，最新的在前"""
        stmt = (
            select(FriendRequest, User)
            .join(User, User.id == FriendRequest.from_user_id)
            .where(FriendRequest.to_user_id == to_user_id)
            .order_by(desc(FriendRequest.created_at))
        )
        result = await self.db.execute(stmt)
        return [(request, sender) for request, sender in result.all()]

    async def delete_involving_user(self, user_id: UUID) -> int:
        return await self.delete_where(
            or_(FriendRequest.from_user_id == user_id, FriendRequest.to_user_id == user_id)
        )
