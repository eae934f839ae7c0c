"""
Exception Handlers
"""

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger(__name__)

class ErrorCode:
    """错误代码定义"""
    # 数据接收错误
    INVALID_PAYLOAD = "INVALID_PAYLOAD"

    # 前端拉取错误
    FETCH_FAILURE = "FETCH_FAILURE"

class RadarException(Exception):
    """自定义异常基类"""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(self.message)

class InvalidPayloadError(RadarException):
    """集群快照格式不合法，不会修改注册表"""
    def __init__(self, message: str):
        super().__init__(ErrorCode.INVALID_PAYLOAD, message)

class FetchFailureError(RadarException):
    """拉取资源快照或连接推送流失败"""
    def __init__(self, message: str):
        super().__init__(ErrorCode.FETCH_FAILURE, message)

def setup_exception_handlers(app: FastAPI):
    """设置异常处理器"""

    @app.exception_handler(InvalidPayloadError)
    async def invalid_payload_handler(request: Request, exc: InvalidPayloadError):
        """快照格式异常处理器"""
        logger.warning(f"处理集群快照失败: {exc.message}")
        return JSONResponse(
            status_code=400,
            content={
                "message": "处理请求失败",
                "error": exc.message
            }
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """HTTP异常处理器"""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": True,
                "message": exc.detail,
                "status_code": exc.status_code
            }
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(request: Request, exc: StarletteHTTPException):
        """Starlette异常处理器"""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": True,
                "message": exc.detail,
                "status_code": exc.status_code
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """通用异常处理器"""
        logger.error(f"未处理的异常: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": True,
                "message": "服务器内部错误",
                "status_code": 500
            }
        )
