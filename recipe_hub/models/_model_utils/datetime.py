from datetime import datetime, timezone


def utcnow() -> datetime:
    """统一使用带时区的 UTC 时间"""
    return datetime.now(timezone.utc)
