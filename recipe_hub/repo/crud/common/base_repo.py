from typing import TypeVar, Generic, Optional, Type, List, Union, Dict, Any

from pydantic import BaseModel
from sqlalchemy import asc, desc, func, delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from recipe_hub.core.logger import get_logger
from recipe_hub.core.types.common import ModelType
from recipe_hub.db.repo_registrar import RepositoryRegistrar
from recipe_hub.models._model_utils.datetime import utcnow

CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)

logger = get_logger(__name__)

# 支持 INSERT ... ON CONFLICT 的方言
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType], RepositoryRegistrar):
    def __init__(self, db: AsyncSession, model: Type[ModelType], context: dict = None):
        self.db = db
        self.model = model
        self.context = context or {}

    # ==========================
    # 数据创建方法 (Create)
    # ==========================

    async def create(self, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
        """
        创建一个新的对象实例，并将其添加到会话中。
        """
        create_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        db_obj = self.model(**create_data)
        self.db.add(db_obj)
        await self.db.flush()
        await self.db.refresh(db_obj)
        return db_obj

    async def upsert(
            self,
            values: Dict[str, Any],
            conflict_fields: List[str],
            update_fields: Optional[Dict[str, Any]] = None,
    ) -> ModelType:
        """
        单条语句的 INSERT ... ON CONFLICT DO UPDATE。
        conflict_fields 必须对应一个唯一约束；并发的重复写入只会留下一行。
        """
        dialect_name = self.db.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect_name)
        if insert_fn is None:
            raise NotImplementedError(f"upsert is not supported for dialect '{dialect_name}'")

        # 通过模型实例补齐 id / 时间戳等默认值
        row = self.model(**values).model_dump()
        set_ = {"updated_at": utcnow(), **(update_fields or {})}

        stmt = insert_fn(self.model).values(**row).on_conflict_do_update(
            index_elements=conflict_fields,
            set_=set_,
        )
        await self.db.execute(stmt)

        lookup = select(self.model).execution_options(populate_existing=True)
        for field in conflict_fields:
            lookup = lookup.where(getattr(self.model, field) == values[field])
        return await self._run_and_scalar(lookup, "upsert")

    # ==========================
    # 数据更新方法 (Update)
    # ==========================

    async def update(self, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]]) -> ModelType:
        """
        在内存中更新一个ORM对象的属性 (Read-Modify-Write模式)。
        """
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)

        # 自动更新 updated_at 字段 (如果存在)
        if hasattr(db_obj, "updated_at"):
            setattr(db_obj, "updated_at", utcnow())

        self.db.add(db_obj)
        await self.db.flush()
        await self.db.refresh(db_obj)
        return db_obj

    # ==========================
    # 数据删除方法 (Delete)
    # ==========================

    async def delete(self, db_obj: ModelType) -> None:
        """
        从数据库中物理删除一个对象。
        """
        await self.db.delete(db_obj)
        await self.db.flush()

    async def delete_where(self, *conditions) -> int:
        """
        按条件批量删除，返回受影响的行数。没有匹配的行时返回 0，不报错。
        """
        stmt = delete(self.model).where(*conditions)
        result = await self.db.execute(stmt)
        return result.rowcount

    # ==========================
    # 数据查询方法 (Query)
    # ==========================

    def _base_stmt(self):
        return select(self.model)

    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        stmt = self._base_stmt().where(self.model.id == id)
        return await self._run_and_scalar(stmt, "get_by_id")

    async def find_by_field(self, value: Any, field_name: str, case_insensitive: bool = False) -> Optional[ModelType]:
        """通过指定字段查找单个对象"""
        column = getattr(self.model, field_name)
        stmt = self._base_stmt()
        if case_insensitive:
            stmt = stmt.where(func.lower(column) == str(value).lower())
        else:
            stmt = stmt.where(column == value)
        return await self._run_and_scalar(stmt, f"find_by_{field_name}")

    async def find_all(
            self,
            filters: Optional[Dict[str, Any]] = None,
            order_by: Optional[List[str]] = None,
            limit: Optional[int] = None,
    ) -> List[ModelType]:
        """
        按字段相等条件查询列表；值为 None 的条件忽略。
        """
        stmt = self._base_stmt()
        for field_name, value in (filters or {}).items():
            if value is None:
                continue
            stmt = stmt.where(getattr(self.model, field_name) == value)
        stmt = self.apply_ordering(stmt, order_by or [])
        if limit:
            stmt = stmt.limit(limit)
        return await self._run_and_scalars(stmt, "find_all")

    async def exists(self, *conditions) -> bool:
        stmt = select(self.model.id).where(*conditions).limit(1)
        result = await self.db.execute(stmt)
        return result.first() is not None

    async def count_where(self, *conditions) -> int:
        stmt = select(func.count()).select_from(self.model).where(*conditions)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    def apply_ordering(self, stmt, order_by: List[str]):
        if not order_by:
            return stmt.order_by(desc(self.model.created_at))  # 默认排序

        for sort_field in order_by:
            order_func = asc
            if sort_field.startswith('-'):
                sort_field = sort_field[1:]
                order_func = desc

            column = getattr(self.model, sort_field, None)
            if column is not None:
                stmt = stmt.order_by(order_func(column))
        return stmt

    async def _run_and_scalar(self, stmt, method: str):
        try:
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"[{method}] Failed: {e}")
            raise

    async def _run_and_scalars(self, stmt, method: str):
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"[{method}] Failed: {e}")
            raise
