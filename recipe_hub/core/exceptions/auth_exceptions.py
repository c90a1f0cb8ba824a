# === 认证/登录相关异常 ===
from recipe_hub.core.exceptions.jwt_exceptions import UnauthorizedException
from recipe_hub.core.response_codes import ResponseCodeEnum


class InvalidCredentialsException(UnauthorizedException):
    def __init__(self, message: str = None):
        super().__init__(message, ResponseCodeEnum.INVALID_CREDENTIALS)


class UserDisabledException(UnauthorizedException):
    def __init__(self, message: str = None):
        super().__init__(message, ResponseCodeEnum.USER_DISABLED)
