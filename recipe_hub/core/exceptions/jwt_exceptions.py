from recipe_hub.core.exceptions.base_exception import BaseBusinessException
from recipe_hub.core.response_codes import ResponseCodeEnum


class UnauthorizedException(BaseBusinessException):
    def __init__(self, message: str = None, code_enum: ResponseCodeEnum = ResponseCodeEnum.AUTH_ERROR):
        super().__init__(code_enum, message=message, status_code=401)


class TokenExpiredException(UnauthorizedException):
    def __init__(self, message: str = None):
        super().__init__(message, ResponseCodeEnum.TOKEN_EXPIRED)


class InvalidTokenException(UnauthorizedException):
    def __init__(self, message: str = None):
        super().__init__(message, ResponseCodeEnum.TOKEN_INVALID)


class TokenTypeMismatchException(UnauthorizedException):
    def __init__(self, message: str = None):
        super().__init__(message, ResponseCodeEnum.TOKEN_TYPE_MISMATCH)
