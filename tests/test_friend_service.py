import uuid

import pytest
from sqlalchemy import func, select

from recipe_hub.core.exceptions import (
    ConflictException,
    InvalidArgumentException,
    NotFoundException,
    UserNotFoundException,
)
from recipe_hub.core.response_codes import ResponseCodeEnum
from recipe_hub.enums.social_enums import FriendshipStatus, NotificationType
from recipe_hub.models.social import Friend, FriendRequest, Notification
from recipe_hub.services.social.friend_service import FriendService
from recipe_hub.services.social.notification_service import NotificationService


async def count_rows(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def test_accept_makes_friends_both_ways(factory, session, alice, bob):
    service = FriendService(factory)
    sent = await service.send_request(alice, user_id=bob.id)

    assert (await service.friendship_status(alice, bob.id)).status == FriendshipStatus.SENT
    received = await service.friendship_status(bob, alice.id)
    assert received.status == FriendshipStatus.RECEIVED
    assert received.request_id == sent.request_id

    await service.accept_request(sent.request_id, bob)

    assert (await service.friendship_status(alice, bob.id)).status == FriendshipStatus.FRIENDS
    assert (await service.friendship_status(bob, alice.id)).status == FriendshipStatus.FRIENDS
    assert await count_rows(session, Friend) == 1
    assert await count_rows(session, FriendRequest) == 0

    assert [f.friend.id for f in await service.list_friends(alice)] == [bob.id]
    assert [f.friend.id for f in await service.list_friends(bob)] == [alice.id]


async def test_accept_rolls_back_when_notification_fails(factory, session, monkeypatch, alice, bob):
    service = FriendService(factory)
    sent = await service.send_request(alice, user_id=bob.id)

    async def fail_create(obj_in):
        raise RuntimeError("notification insert failed")

    monkeypatch.setattr(service.notification_repo, "create", fail_create)
    with pytest.raises(RuntimeError):
        await service.accept_request(sent.request_id, bob)

    assert await count_rows(session, Friend) == 0
    assert await count_rows(session, FriendRequest) == 1
    assert await count_rows(session, Notification) == 0
    assert (await service.friendship_status(bob, alice.id)).status == FriendshipStatus.RECEIVED


async def test_accept_notifies_the_sender(factory, alice, bob):
    service = FriendService(factory)
    sent = await service.send_request(alice, email="BOB@example.com")
    await service.accept_request(sent.request_id, bob)

    notifications = await NotificationService(factory).list_notifications(alice)
    assert len(notifications) == 1
    assert notifications[0].type == NotificationType.FRIEND_ACCEPTED
    assert notifications[0].from_user.id == bob.id
    assert notifications[0].read is False

    assert await NotificationService(factory).list_notifications(bob) == []


async def test_decline_returns_to_none_and_allows_resend(factory, session, alice, bob):
    service = FriendService(factory)
    sent = await service.send_request(alice, user_id=bob.id)

    await service.decline_request(sent.request_id, bob)

    assert (await service.friendship_status(alice, bob.id)).status == FriendshipStatus.NONE
    assert await count_rows(session, Friend) == 0

    again = await service.send_request(alice, user_id=bob.id)
    assert again.request_id != sent.request_id


async def test_send_twice_conflicts(factory, alice, bob):
    service = FriendService(factory)
    await service.send_request(alice, user_id=bob.id)

    with pytest.raises(ConflictException) as exc:
        await service.send_request(alice, user_id=bob.id)
    assert exc.value.code == ResponseCodeEnum.FRIEND_REQUEST_PENDING.code

    # 反方向也算“处理中”
    with pytest.raises(ConflictException):
        await service.send_request(bob, user_id=alice.id)


async def test_send_to_existing_friend_conflicts(factory, alice, bob):
    service = FriendService(factory)
    sent = await service.send_request(alice, user_id=bob.id)
    await service.accept_request(sent.request_id, bob)

    with pytest.raises(ConflictException) as exc:
        await service.send_request(bob, user_id=alice.id)
    assert exc.value.code == ResponseCodeEnum.ALREADY_FRIENDS.code


async def test_send_to_self_or_unknown_user(factory, alice):
    service = FriendService(factory)
    with pytest.raises(InvalidArgumentException):
        await service.send_request(alice, user_id=alice.id)
    with pytest.raises(UserNotFoundException):
        await service.send_request(alice, user_id=uuid.uuid4())
    with pytest.raises(UserNotFoundException):
        await service.send_request(alice, email="ghost@example.com")


async def test_only_recipient_can_accept_or_decline(factory, session, alice, bob, carol):
    service = FriendService(factory)
    sent = await service.send_request(alice, user_id=bob.id)

    with pytest.raises(NotFoundException):
        await service.accept_request(sent.request_id, alice)
    with pytest.raises(NotFoundException):
        await service.accept_request(sent.request_id, carol)
    with pytest.raises(NotFoundException):
        await service.decline_request(sent.request_id, carol)

    assert await count_rows(session, FriendRequest) == 1


async def test_remove_friend_is_idempotent(factory, session, alice, bob):
    service = FriendService(factory)
    sent = await service.send_request(alice, user_id=bob.id)
    await service.accept_request(sent.request_id, bob)

    # 由接收方删除，存储方向与调用方向无关
    await service.remove_friend(bob, alice.id)
    await service.remove_friend(bob, alice.id)

    assert await count_rows(session, Friend) == 0
    assert (await service.friendship_status(alice, bob.id)).status == FriendshipStatus.NONE


async def test_incoming_requests_newest_first(factory, alice, bob, carol):
    service = FriendService(factory)
    await service.send_request(bob, user_id=alice.id)
    await service.send_request(carol, user_id=alice.id)

    incoming = await service.list_incoming_requests(alice)
    assert [r.from_user.id for r in incoming] == [carol.id, bob.id]
    assert await service.list_incoming_requests(bob) == []


async def test_mark_notification_read_only_by_recipient(factory, alice, bob):
    friends = FriendService(factory)
    notifications = NotificationService(factory)
    sent = await friends.send_request(alice, user_id=bob.id)
    await friends.accept_request(sent.request_id, bob)
    notification = (await notifications.list_notifications(alice))[0]

    with pytest.raises(NotFoundException):
        await notifications.mark_read(notification.id, bob)

    # read=None 不做任何修改
    unchanged = await notifications.mark_read(notification.id, alice, read=None)
    assert unchanged.read is False

    updated = await notifications.mark_read(notification.id, alice, read=True)
    assert updated.read is True
    assert (await notifications.list_notifications(alice))[0].read is True
