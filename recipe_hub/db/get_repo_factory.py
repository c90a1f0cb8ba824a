from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.db.session import get_session, AsyncSessionLocal


# --- 版本一：为 FastAPI 依赖注入系统提供的工厂获取器 ---
def get_repository_factory(
        session: AsyncSession = Depends(get_session),
) -> RepositoryFactory:
    """
    专为 FastAPI API 请求设计的依赖注入函数。
    工厂里的所有 Repository 共享请求级别的 session。
    """
    return RepositoryFactory(db=session)


# --- 版本二：为独立脚本/后台任务提供的工厂获取器 ---
@asynccontextmanager
async def get_standalone_repository_factory(
        context: dict = None
) -> AsyncGenerator[RepositoryFactory, None]:
    """
    一个独立的、不依赖 FastAPI 请求的上下文管理器。
    用于后台任务、初始化脚本等场景。

    用法:
    async with get_standalone_repository_factory() as repo_factory:
        # ... 使用 repo_factory 获取 repo 并执行操作 ...
    """
    session = AsyncSessionLocal()
    try:
        # 自己开启一个顶级事务，退出时自动提交 / 回滚
        async with session.begin():
            yield RepositoryFactory(db=session, context=context or {})
    finally:
        await session.close()
