# recipe_hub/db/repository_factory.py
from contextlib import asynccontextmanager
from typing import Optional, Type, TypeVar, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from recipe_hub.repo.crud.common.base_repo import BaseRepository

RepoType = TypeVar("RepoType", bound=BaseRepository)


class RepositoryNotFoundError(Exception):
    pass


class RepositoryFactory:
    """
    请求级别的 Repository 容器。
    同一个工厂发出的所有 Repository 绑定同一个 AsyncSession，也就是同一个请求事务；
    服务层通过 get_repo_by_type 取 Repository，通过 atomic() 划定需要整体成功或整体回滚的写入。
    """

    def __init__(self, db: AsyncSession, *, context: Optional[dict] = None):
        self._db = db
        self.context = context or {}
        self._instances: Dict[type, BaseRepository] = {}

    def get_repo_by_type(self, repo_type: Type[RepoType]) -> RepoType:
        """按类型取 Repository；首次访问时从注册表里找到实现类并实例化，之后复用。"""
        cached = self._instances.get(repo_type)
        if cached is not None:
            return cached

        for cls in BaseRepository.registry.values():
            if cls is not BaseRepository and issubclass(cls, repo_type):
                instance = cls(self._db, context=self.context)
                self._instances[repo_type] = instance
                return instance

        raise RepositoryNotFoundError(f"Repository of type '{repo_type.__name__}' not registered.")

    @asynccontextmanager
    async def atomic(self) -> AsyncGenerator[None, None]:
        """
        在请求事务内开启一个 SAVEPOINT。
        块内任一步失败，块内的所有写入一起回滚，异常继续向上抛出。
        """
        async with self._db.begin_nested():
            yield
