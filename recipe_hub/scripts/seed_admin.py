#!/usr/bin/env python3
"""
创建（或提升）管理员账号。

用法:
    ADMIN_PASSWORD=... python -m recipe_hub.scripts.seed_admin
邮箱来自 security_settings.admin_email，密码必须通过 ADMIN_PASSWORD 提供。
"""
import asyncio
import sys

from recipe_hub.config.settings import settings
from recipe_hub.core.logger import logger
from recipe_hub.db.get_repo_factory import get_standalone_repository_factory
from recipe_hub.db.session import create_db_and_tables, engine
from recipe_hub.services.users.user_service import UserService


async def seed_admin() -> None:
    security = settings.security_settings
    if not security.admin_password:
        raise RuntimeError("未设置 ADMIN_PASSWORD，拒绝创建管理员账号")

    await create_db_and_tables()
    try:
        async with get_standalone_repository_factory() as repo_factory:
            user = await UserService(repo_factory).ensure_admin(security.admin_email, security.admin_password)
    finally:
        await engine.dispose()

    logger.info(f"✅ 管理员账号就绪: {user.email} ({user.id})")


def main():
    try:
        asyncio.run(seed_admin())
    except RuntimeError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
