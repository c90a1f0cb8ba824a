from typing import Any, Optional, Dict, TypeVar, Generic

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from sqlmodel import SQLModel

from recipe_hub.core.logger import logger
from recipe_hub.core.response_codes import ResponseCodeEnum

T = TypeVar('T')


# === Generic Pydantic Response Schema ===
class StandardResponse(BaseModel, Generic[T]):
    code: int
    message: str
    data: Optional[T] = None

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        json_schema_extra={
            "example": {
                "code": 0,
                "message": "Success",
                "data": {}
            }
        },
    )


# === 自动序列化工具 ===
def to_json_compatible(data: Any) -> Any:
    # SQLModel 表模型也是 pydantic 模型，统一走 model_dump
    if isinstance(data, (BaseModel, SQLModel)):
        return data.model_dump()

    if isinstance(data, (list, tuple)):
        return [to_json_compatible(item) for item in data]

    if isinstance(data, dict):
        return {k: to_json_compatible(v) for k, v in data.items()}

    return data  # int, str, bool, None, etc.


# === 成功响应 ===
def response_success(
    data: Any = None,
    code: ResponseCodeEnum = ResponseCodeEnum.SUCCESS,
    http_status: int = 200,
    message: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    final_message = message or code.message
    logger.debug(f"Response Success | code: {code.code}, message: {final_message}")

    # 🟡 先自定义序列化（处理 Pydantic / SQLModel）
    serialized_data = to_json_compatible(data)
    # ✅ 再使用 FastAPI 内置方法进行最终兼容处理（处理 datetime, UUID 等）
    encoded_data = jsonable_encoder(serialized_data)

    return JSONResponse(
        status_code=http_status,
        content={
            "code": code.code,
            "message": final_message,
            "data": encoded_data
        },
        headers=headers
    )
