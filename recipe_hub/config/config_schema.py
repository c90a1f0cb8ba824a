from typing import Optional

from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"
    api_prefix: str = "/api/v1"
    env: str = "dev"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class DatabaseConfig(BaseModel):
    url: str = "sqlite+aiosqlite:///./recipe_hub.db"
    echo: bool = False


class LoggingConfig(BaseModel):
    enable_file: bool = True
    log_dir: str = "./logs"
    rotation: str = "1 week"
    retention: str = "1 month"


class SecuritySettings(BaseModel):
    token_expire_minutes: int = 60 * 24
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "recipe-hub"
    jwt_audience: Optional[str] = None
    # 必须通过 JWT_SECRET 提供，没有默认值
    secret: str
    # 用户不存在时也做一次哈希校验，避免通过响应时间枚举邮箱
    # 未配置时在启动时生成一个
    fake_password_hash: Optional[str] = None
    admin_email: str = "admin@admin.com"
    # 只有 seed 脚本使用；未设置 ADMIN_PASSWORD 时拒绝创建管理员
    admin_password: Optional[str] = None


class ListingConfig(BaseModel):
    """列表类接口的上限配置"""
    notifications_limit: int = 50
    admin_comments_limit: int = 200


# ========================================================================================
#
#   所有配置模型都要写在APPconfig上方
#
# ========================================================================================
class AppConfig(BaseModel):
    server: ServerConfig
    database: DatabaseConfig
    logging: LoggingConfig
    security_settings: SecuritySettings
    listing: ListingConfig = Field(default_factory=ListingConfig)
