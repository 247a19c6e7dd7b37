import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    业务错误：渲染为 {"error": <message>, **extra}。
    前端只读 error 字段；extra 用来透传上游的状态码与原始响应体。
    """

    def __init__(self, status_code: int, error: str, **extra: Any):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.extra = extra

    def to_content(self) -> dict:
        return {"error": self.error, **self.extra}


class UpstreamError(ApiError):
    """第三方接口失败（非 2xx 或响应体无法解析），统一 502。"""

    def __init__(self, error: str, **extra: Any):
        super().__init__(502, error, **extra)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ApiError)
    async def api_error_handler(_, exc: ApiError):
        if exc.status_code >= 500:
            logger.warning("api error %s: %s", exc.status_code, exc.error)
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_content()))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_, exc: RequestValidationError):
        # 请求体不是 JSON / 字段类型不对，一律按客户端错误处理
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Unhandled", "detail": str(exc)})
