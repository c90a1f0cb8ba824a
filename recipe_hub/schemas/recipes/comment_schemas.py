from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, StringConstraints

from recipe_hub.schemas.users.user_schemas import UserSummary

# 先去掉首尾空白再校验长度，纯空白的评论会被拒绝
CommentText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2000)]


class CommentCreate(BaseModel):
    text: CommentText


class CommentRead(BaseModel):
    id: UUID
    recipe_id: UUID
    text: str
    created_at: datetime
    user: UserSummary


class AdminCommentRead(CommentRead):
    recipe_name: str
