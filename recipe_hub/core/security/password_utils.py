# recipe_hub/core/security/password_utils.py
from functools import lru_cache
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from recipe_hub.config.settings import settings


def get_password_hash(password: str) -> str:
    """加盐哈希，算法与参数编码在结果字符串里"""
    return generate_password_hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return check_password_hash(hashed_password, plain_password)


@lru_cache()
def _fake_password_hash() -> str:
    return settings.security_settings.fake_password_hash or generate_password_hash("recipe-hub-fake-password")


def verify_password_or_fake(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    用户不存在时也做一次完整的哈希校验，使“用户不存在”和“密码错误”的耗时一致。
    """
    if hashed_password is None:
        check_password_hash(_fake_password_hash(), plain_password)
        return False
    return verify_password(plain_password, hashed_password)
