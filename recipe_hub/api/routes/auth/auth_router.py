from fastapi import APIRouter, Depends, status

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_auth_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.schemas.users.user_schemas import UserRegister, UserLogin, UserRead, TokenRead
from recipe_hub.services.auth.auth_service import AuthService

router = APIRouter()


# === Health ===
@router.get("/health", response_model=StandardResponse[dict])
async def health():
    return response_success(data={"status": "ok"})


# === Register ===
@router.post(
    "/register",
    response_model=StandardResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    user_data: UserRegister,
    service: AuthService = Depends(get_auth_service),
):
    user = await service.register_user(user_data)
    return response_success(
        data=UserRead.model_validate(user),
        http_status=status.HTTP_201_CREATED,
        message="用户注册成功",
    )


# === Login ===
@router.post("/login", response_model=StandardResponse[TokenRead])
async def login_user(
    data: UserLogin,
    service: AuthService = Depends(get_auth_service),
):
    token = await service.login_user(data)
    return response_success(data=token, message="登录成功")


# === Me ===
@router.get("/me", response_model=StandardResponse[UserContext])
async def read_me(current_user: UserContext = Depends(require_login)):
    return response_success(data=current_user)
