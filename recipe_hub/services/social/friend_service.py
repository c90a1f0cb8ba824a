from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from recipe_hub.core.exceptions import (
    ConflictException,
    InvalidArgumentException,
    NotFoundException,
    UserNotFoundException,
)
from recipe_hub.core.response_codes import ResponseCodeEnum
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.enums.social_enums import FriendshipStatus, NotificationType
from recipe_hub.repo.crud.social.friend_repo import FriendRepository
from recipe_hub.repo.crud.social.friend_request_repo import FriendRequestRepository
from recipe_hub.repo.crud.social.notification_repo import NotificationRepository
from recipe_hub.repo.crud.users.user_repo import UserRepository
from recipe_hub.schemas.social.friend_schemas import (
    FriendRead,
    FriendRequestRead,
    FriendRequestSentRead,
    FriendshipStatusRead,
)
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.schemas.users.user_schemas import UserSummary
from recipe_hub.services._base_service import BaseService


class FriendService(BaseService):
    """
    好友请求状态机：
        A 视角: NONE -> SENT -> FRIENDS / NONE
        B 视角: NONE -> RECEIVED -> FRIENDS / NONE
    好友关系按被接受请求的方向存一行，读取时两个方向都检查。
    """

    def __init__(self, factory: RepositoryFactory):
        super().__init__(factory)
        self.user_repo: UserRepository = factory.get_repo_by_type(UserRepository)
        self.friend_repo: FriendRepository = factory.get_repo_by_type(FriendRepository)
        self.request_repo: FriendRequestRepository = factory.get_repo_by_type(FriendRequestRepository)
        self.notification_repo: NotificationRepository = factory.get_repo_by_type(NotificationRepository)

    # ==========================
    # 发送 / 处理请求
    # ==========================

    async def send_request(
            self,
            current_user: UserContext,
            user_id: Optional[UUID] = None,
            email: Optional[str] = None,
    ) -> FriendRequestSentRead:
        if user_id is not None:
            target = await self.user_repo.get_by_id(user_id)
        elif email:
            target = await self.user_repo.get_by_email(email)
        else:
            raise InvalidArgumentException("必须提供 user_id 或 email")

        if target is None:
            raise UserNotFoundException()
        if target.id == current_user.id:
            raise InvalidArgumentException("不能向自己发送好友请求")

        if await self.friend_repo.are_friends(current_user.id, target.id):
            raise ConflictException(code_enum=ResponseCodeEnum.ALREADY_FRIENDS)
        if await self.request_repo.pending_between(current_user.id, target.id):
            raise ConflictException(code_enum=ResponseCodeEnum.FRIEND_REQUEST_PENDING)

        try:
            async with self.factory.atomic():
                request = await self.request_repo.create(
                    {"from_user_id": current_user.id, "to_user_id": target.id}
                )
        except IntegrityError:
            # 并发下同一对用户的重复请求
            raise ConflictException(code_enum=ResponseCodeEnum.FRIEND_REQUEST_PENDING)

        self.logger.info(f"【好友】{current_user.id} 向 {target.id} 发送了好友请求 {request.id}")
        return FriendRequestSentRead(request_id=request.id, to_user=UserSummary.model_validate(target))

    async def accept_request(self, request_id: UUID, current_user: UserContext) -> None:
        """
        只有接收方可以接受。建立好友关系、删除请求、通知发起方在同一个事务里完成。
        """
        request = await self.request_repo.get_for_recipient(request_id, current_user.id)
        if request is None:
            raise NotFoundException("好友请求不存在")

        from_user_id = request.from_user_id
        async with self.factory.atomic():
            if not await self.friend_repo.are_friends(from_user_id, current_user.id):
                await self.friend_repo.create({"user_id": from_user_id, "friend_id": current_user.id})
            await self.request_repo.delete(request)
            await self.notification_repo.create({
                "to_user_id": from_user_id,
                "from_user_id": current_user.id,
                "type": NotificationType.FRIEND_ACCEPTED,
            })

        self.logger.info(f"【好友】{current_user.id} 接受了 {from_user_id} 的好友请求")

    async def decline_request(self, request_id: UUID, current_user: UserContext) -> None:
        request = await self.request_repo.get_for_recipient(request_id, current_user.id)
        if request is None:
            raise NotFoundException("好友请求不存在")
        await self.request_repo.delete(request)
        self.logger.info(f"【好友】{current_user.id} 拒绝了好友请求 {request_id}")

    async def remove_friend(self, current_user: UserContext, other_user_id: UUID) -> None:
        """两个方向一起删除；本来就不是好友也不报错"""
        removed = await self.friend_repo.delete_between(current_user.id, other_user_id)
        if removed:
            self.logger.info(f"【好友】{current_user.id} 删除了好友 {other_user_id}")

    # ==========================
    # 查询
    # ==========================

    async def friendship_status(self, current_user: UserContext, other_user_id: UUID) -> FriendshipStatusRead:
        if await self.friend_repo.are_friends(current_user.id, other_user_id):
            return FriendshipStatusRead(status=FriendshipStatus.FRIENDS)

        sent = await self.request_repo.find_directed(current_user.id, other_user_id)
        if sent is not None:
            return FriendshipStatusRead(status=FriendshipStatus.SENT, request_id=sent.id)

        received = await self.request_repo.find_directed(other_user_id, current_user.id)
        if received is not None:
            return FriendshipStatusRead(status=FriendshipStatus.RECEIVED, request_id=received.id)

        return FriendshipStatusRead(status=FriendshipStatus.NONE)

    async def list_friends(self, current_user: UserContext) -> List[FriendRead]:
        rows = await self.friend_repo.list_for_user(current_user.id)
        return [FriendRead(id=friend.id, friend=UserSummary.model_validate(other)) for friend, other in rows]

    async def list_incoming_requests(self, current_user: UserContext) -> List[FriendRequestRead]:
        rows = await self.request_repo.list_incoming(current_user.id)
        return [
            FriendRequestRead(
                id=request.id,
                from_user=UserSummary.model_validate(sender),
                created_at=request.created_at,
            )
            for request, sender in rows
        ]
