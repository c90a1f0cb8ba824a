import os

# 必须在导入 recipe_hub 之前设置：配置在第一次导入时加载并缓存
os.environ.setdefault("ENV", "dev")
os.environ["LOG_ENABLE_FILE"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from helpers import make_user
from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.db.session import build_engine, get_session
from recipe_hub.enums.user_enums import UserRole
from recipe_hub.main import app
from recipe_hub.schemas.users.user_context import UserContext


@pytest_asyncio.fixture
async def engine():
    # 每个测试一个全新的内存库；StaticPool 让所有会话共用同一个连接
    engine = build_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def factory(session) -> RepositoryFactory:
    return RepositoryFactory(db=session)


@pytest_asyncio.fixture
async def alice(session) -> UserContext:
    return await make_user(session, "alice@example.com", name="Alice")


@pytest_asyncio.fixture
async def bob(session) -> UserContext:
    return await make_user(session, "bob@example.com", name="Bob")


@pytest_asyncio.fixture
async def carol(session) -> UserContext:
    return await make_user(session, "carol@example.com", name="Carol")


@pytest_asyncio.fixture
async def admin(session) -> UserContext:
    return await make_user(session, "admin@admin.com", role=UserRole.ADMIN, name="Admin")


# ==========================
# HTTP 客户端
# ==========================

@pytest_asyncio.fixture
async def client(session_maker):
    """
    驱动真实的 FastAPI 应用；get_session 换成测试库，提交/回滚语义与线上一致。
    """
    async def override_get_session():
        session = session_maker()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    app.dependency_overrides[get_session] = override_get_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
