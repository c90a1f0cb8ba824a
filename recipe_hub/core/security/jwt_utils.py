# recipe_hub/core/security/jwt_utils.py

import uuid
from datetime import datetime, timedelta, timezone
from typing import Tuple, Literal

import jwt
from jwt import ExpiredSignatureError, InvalidTokenError

from recipe_hub.config.settings import settings
from recipe_hub.core.exceptions import TokenExpiredException, InvalidTokenException, TokenTypeMismatchException

ALGORITHM = settings.security_settings.jwt_algorithm or "HS256"
ISSUER = settings.security_settings.jwt_issuer or "recipe-hub"
AUDIENCE = settings.security_settings.jwt_audience or None


# =====================
# Token 生成
# =====================

def create_token(
    data: dict,
    expires_delta: timedelta,
    token_type: Literal["access"] = "access",
) -> Tuple[str, timedelta, str]:
    """
    返回 (token, expires_delta, jti)
    """
    now = datetime.now(timezone.utc)
    expire = now + expires_delta
    jti = str(uuid.uuid4())
    to_encode = {
        **data,
        "exp": expire,
        "iat": now,
        "nbf": now,
        "iss": ISSUER,
        "jti": jti,
        "type": token_type,
    }
    if AUDIENCE:
        to_encode["aud"] = AUDIENCE

    encoded = jwt.encode(to_encode, settings.security_settings.secret, algorithm=ALGORITHM)
    return encoded, expires_delta, jti


def create_access_token(data: dict) -> Tuple[str, timedelta, str]:
    delta = timedelta(minutes=settings.security_settings.token_expire_minutes)
    return create_token(data, delta, "access")


# =====================
# Token 解码
# =====================

def decode_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.security_settings.secret,
            algorithms=[ALGORITHM],
            issuer=ISSUER,
            audience=AUDIENCE,
        )
    except ExpiredSignatureError:
        raise TokenExpiredException()
    except InvalidTokenError as e:
        raise InvalidTokenException(message=str(e))


# =====================
# Token 类型验证
# =====================

def validate_token_type(payload: dict, expected: str):
    if payload.get("type") != expected:
        raise TokenTypeMismatchException(message=f"应为 {expected}")
