# recipe_hub/core/exceptions/base_exception.py

from typing import Optional

from recipe_hub.core.response_codes import ResponseCodeEnum


class BaseBusinessException(Exception):
    def __init__(
            self,
            code_enum: Optional[ResponseCodeEnum] = None,
            code: Optional[int] = None,
            status_code: int = 400,
            message: Optional[str] = None,
            extra: Optional[dict] = None,
    ):
        code_enum = code_enum or ResponseCodeEnum.SERVER_ERROR
        self.code = code if code is not None else code_enum.code
        self.message = message or code_enum.message
        self.status_code = status_code
        self.extra = extra or {}
        super().__init__(self.message)

    def __str__(self):
        return f"[{self.code}] {self.message}"

    def to_dict(self):
        return {
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "extra": self.extra,
        }


class NotFoundException(BaseBusinessException):
    """
    当请求的资源不存在，或者调用者无权看到它时抛出。
    两种情况对外不做区分。
    """
    def __init__(self, message: str = "资源不存在", code_enum: ResponseCodeEnum = ResponseCodeEnum.NOT_FOUND):
        super().__init__(code_enum, message=message, status_code=404)


class AlreadyExistsException(BaseBusinessException):
    """
    当尝试创建一个已存在的资源时抛出（例如，邮箱重复）。
    """
    def __init__(self, message: str = "资源已存在", code_enum: ResponseCodeEnum = ResponseCodeEnum.ALREADY_EXISTS):
        super().__init__(code_enum, message=message, status_code=409)


class ConflictException(BaseBusinessException):
    """
    操作与资源当前状态冲突（例如，已经是好友、好友请求已存在）。
    """
    def __init__(self, message: str = None, code_enum: ResponseCodeEnum = ResponseCodeEnum.CONFLICT):
        super().__init__(code_enum, message=message, status_code=409)


class PermissionDeniedException(BaseBusinessException):
    """
    权限不足：资源对调用者可见，但不允许执行该操作
    """
    def __init__(self, message: str = "权限不足"):
        super().__init__(ResponseCodeEnum.FORBIDDEN, message=message, status_code=403)


class InvalidArgumentException(BaseBusinessException):
    def __init__(self, message: str = None):
        super().__init__(ResponseCodeEnum.INVALID_ARGUMENT, message=message, status_code=400)
