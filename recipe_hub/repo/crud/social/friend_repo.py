from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import and_, asc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.models.social import Friend
from recipe_hub.models.user import User
from recipe_hub.repo.crud.common.base_repo import BaseRepository


def _between(a: UUID, b: UUID):
    """Friend(a, b) 或 Friend(b, a)"""
    return or_(
        and_(Friend.user_id == a, Friend.friend_id == b),
        and_(Friend.user_id == b, Friend.friend_id == a),
    )


class FriendRepository(BaseRepository[Friend, BaseModel, BaseModel]):
    def __init__(self, db: AsyncSession, context: Optional[Dict[str, Any]] = None):
        super().__init__(db=db, model=Friend, context=context)

    async def are_friends(self, a: UUID, b: UUID) -> bool:
        return await self.exists(_between(a, b))

    async def delete_between(self, a: UUID, b: UUID) -> int:
        return await self.delete_where(_between(a, b))

    async def list_for_user(self, user_id: UUID) -> List[Tuple[Friend, User]]:
        """
        两个方向的好友关系都查出来，返回 (关系, 对方用户)，按对方用户去重。
        """
        stmt = (
            select(Friend, User)
            .join(
                User,
                or_(
                    and_(Friend.user_id == user_id, User.id == Friend.friend_id),
                    and_(Friend.friend_id == user_id, User.id == Friend.user_id),
                ),
            )
            .order_by(asc(Friend.created_at))
        )
        result = await self.db.execute(stmt)

        seen = set()
        friends = []
        for friend, other in result.all():
            if other.id in seen:
                continue
            seen.add(other.id)
            friends.append((friend, other))
        return friends

    async def delete_involving_user(self, user_id: UUID) -> int:
        return await self.delete_where(or_(Friend.user_id == user_id, Friend.friend_id == user_id))
