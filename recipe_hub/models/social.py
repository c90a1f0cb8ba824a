import uuid

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field

from recipe_hub.enums.social_enums import NotificationType
from recipe_hub.models._model_utils.guid import GUID
from recipe_hub.models.base.base_model import BaseModel


class Friend(BaseModel, table=True):
    """
    好友关系。按被接受的请求方向存储（user_id = 请求发起方），
    但语义上是对称的：读取时两个方向都要检查。
    """
    user_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True)
    friend_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "friend_id", name="uq_friend_pair"),
        CheckConstraint("user_id <> friend_id", name="ck_friend_not_self"),
    )


class FriendRequest(BaseModel, table=True):
    from_user_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True)
    to_user_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True)

    __table_args__ = (
        UniqueConstraint("from_user_id", "to_user_id", name="uq_friend_request_pair"),
        CheckConstraint("from_user_id <> to_user_id", name="ck_friend_request_not_self"),
    )


class Notification(BaseModel, table=True):
    # 创建后只有 read 字段会变化
    to_user_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID(), index=True)
    from_user_id: uuid.UUID = Field(foreign_key="user.id", sa_type=GUID())
    type: NotificationType = Field(nullable=False)
    read: bool = Field(default=False)
