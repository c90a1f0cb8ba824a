# === 用户相关异常 ===
from recipe_hub.core.exceptions.base_exception import AlreadyExistsException, NotFoundException
from recipe_hub.core.response_codes import ResponseCodeEnum


class UserAlreadyExistsException(AlreadyExistsException):
    def __init__(self, message: str = None):
        super().__init__(message or ResponseCodeEnum.USER_ALREADY_EXISTS.message,
                         ResponseCodeEnum.USER_ALREADY_EXISTS)


class UserNotFoundException(NotFoundException):
    def __init__(self, message: str = None):
        super().__init__(message or ResponseCodeEnum.USER_NOT_FOUND.message,
                         ResponseCodeEnum.USER_NOT_FOUND)
