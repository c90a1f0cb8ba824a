from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from recipe_hub.api.router import api_router
from recipe_hub.config.settings import settings
from recipe_hub.core.exceptions import BaseBusinessException, UnauthorizedException
from recipe_hub.core.logger import logger
from recipe_hub.core.response_codes import ResponseCodeEnum
from recipe_hub.db.session import create_db_and_tables


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 应用启动中，正在初始化资源...")

    # 初始化数据库
    await create_db_and_tables()
    logger.info("✅ 所有资源初始化完成")

    yield

    logger.info("🛑 应用已关闭")


app = FastAPI(title="Recipe Hub", lifespan=lifespan)


# 使用 @app.exception_handler 装饰器来捕获所有 UnauthorizedException 及其子类
@app.exception_handler(UnauthorizedException)
async def auth_exception_handler(request: Request, exc: UnauthorizedException):
    logger.info(f"Unauthorized | code: {exc.code}, message: {exc.message}, path: {request.url.path}")
    return JSONResponse(
        status_code=401,
        content={
            "code": exc.code,
            "message": exc.message,
            "data": None
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(BaseBusinessException)
async def business_exception_handler(request: Request, exc: BaseBusinessException):
    # 业务异常自带 HTTP 状态码：404 / 403 / 409 / 400
    logger.warning(f"Business Exception | code: {exc.code}, message: {exc.message}, path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "code": exc.code,
            "message": exc.message,
            "data": None
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation Error | path: {request.url.path}, errors: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "code": ResponseCodeEnum.VALIDATION_ERROR.code,
            "message": ResponseCodeEnum.VALIDATION_ERROR.message,
            "data": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"Unhandled Exception | {repr(exc)} | path: {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "code": ResponseCodeEnum.SERVER_ERROR.code,
            "message": ResponseCodeEnum.SERVER_ERROR.message,
            "data": None
        }
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.server.api_prefix)
