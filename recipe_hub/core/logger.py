# recipe_hub/core/logger.py
import sys
from pathlib import Path

from loguru import logger

from recipe_hub.config.settings import settings

# 获取运行环境
ENV = settings.server.env.lower()

# 清除默认 handler
logger.remove()

# 控制台输出
logger.add(
    sys.stderr,
    level="DEBUG" if ENV in ("dev", "development") else "INFO",
    colorize=True,
    enqueue=True,
    backtrace=True,
    diagnose=True,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level: <8}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>"
)

if settings.logging.enable_file:
    # 日志目录
    log_dir = Path(settings.logging.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # 普通文本日志输出到文件
    logger.add(
        log_dir / "recipe_hub.log",
        level="DEBUG",
        rotation=settings.logging.rotation,
        retention=settings.logging.retention,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=True
    )

    # JSON 结构化日志输出，只记录警告及以上
    logger.add(
        log_dir / "recipe_hub.errors.json",
        level="WARNING",
        rotation=settings.logging.rotation,
        retention=settings.logging.retention,
        serialize=True,
        encoding="utf-8",
        enqueue=True
    )


def get_logger(name: str = None):
    """仿 logging.getLogger() 实现的 loguru logger 工厂方法"""
    if name:
        return logger.bind(module=name)
    return logger


logger.debug(f"Log system initialized in {ENV} mode.")
