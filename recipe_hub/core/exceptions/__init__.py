# recipe_hub/core/exceptions/__init__.py

from .base_exception import (
    BaseBusinessException,
    NotFoundException,
    AlreadyExistsException,
    ConflictException,
    PermissionDeniedException,
    InvalidArgumentException,
)
from .user_exceptions import (
    UserAlreadyExistsException,
    UserNotFoundException,
)
from .jwt_exceptions import (
    UnauthorizedException,
    TokenExpiredException,
    InvalidTokenException,
    TokenTypeMismatchException,
)
from .auth_exceptions import (
    InvalidCredentialsException,
    UserDisabledException,
)

__all__ = [
    "BaseBusinessException",
    "NotFoundException",
    "AlreadyExistsException",
    "ConflictException",
    "PermissionDeniedException",
    "InvalidArgumentException",

    "UserAlreadyExistsException",
    "UserNotFoundException",

    "UnauthorizedException",
    "TokenExpiredException",
    "InvalidTokenException",
    "TokenTypeMismatchException",

    "InvalidCredentialsException",
    "UserDisabledException",
]
