import re
import uuid
from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import SQLModel, Field

from recipe_hub.models._model_utils.datetime import utcnow
from recipe_hub.models._model_utils.guid import GUID


def camel_to_snake(name: str) -> str:
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


class AutoTableNameMixin:
    @declared_attr
    def __tablename__(cls):
        return camel_to_snake(cls.__name__)


class BaseModel(AutoTableNameMixin, SQLModel):
    """所有业务表的基类：UUID 主键 + 创建/更新时间"""
    id: uuid.UUID = Field(default_factory=GUID.generate, sa_type=GUID(), primary_key=True, index=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utcnow},
    )
