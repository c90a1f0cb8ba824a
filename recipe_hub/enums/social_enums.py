from enum import Enum


class NotificationType(str, Enum):
    FRIEND_ACCEPTED = "FRIEND_ACCEPTED"


class FriendshipStatus(str, Enum):
    """
    从“我”的视角看与另一个用户的关系。
    NONE -> SENT -> FRIENDS / NONE（对方看到的是 NONE -> RECEIVED -> ...）
    """
    NONE = "none"
    SENT = "sent"
    RECEIVED = "received"
    FRIENDS = "friends"
