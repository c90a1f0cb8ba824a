import json
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

import recipe_hub.models  # noqa: F401  注册所有表模型
from recipe_hub.config.settings import settings
from recipe_hub.core.logger import logger

DATABASE_URL = settings.database.url


def _json_dumps(obj) -> str:
    # 配料等 JSON 列按原文存储，中文关键词才能用 LIKE 搜到
    return json.dumps(obj, ensure_ascii=False)


def enable_sqlite_savepoints(engine: AsyncEngine) -> AsyncEngine:
    """
    pysqlite 默认自己决定何时发 BEGIN，SAVEPOINT 会因此提前提交外层事务。
    改为由 SQLAlchemy 显式开启事务，begin_nested() 才能按预期回滚。
    """
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def build_engine(url: str, **kwargs) -> AsyncEngine:
    return enable_sqlite_savepoints(
        create_async_engine(url, json_serializer=_json_dumps, **kwargs)
    )


# 初始化数据库引擎和 Session
engine = build_engine(DATABASE_URL, echo=settings.database.echo)
AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# 获取 DB session 的依赖注入函数
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    提供一个数据库会话，并采用明确的事务控制。
    """
    session = AsyncSessionLocal()
    try:
        yield session
        # 如果路由函数成功执行（没有抛出异常），则在最后提交所有更改。
        await session.commit()
    except Exception:
        # 如果在处理过程中发生任何异常，则回滚所有更改。
        await session.rollback()
        # 重新抛出异常，以便上层（FastAPI 的异常处理器）可以捕获和处理它。
        raise
    finally:
        # 无论成功还是失败，最终都要关闭会话，释放连接。
        await session.close()


# 初始化数据库（启动时调用）
async def create_db_and_tables():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("🗄️ 数据表检查/创建完成")
