"""
Logging Middleware
"""

from fastapi import Request
import logging
import time

logger = logging.getLogger(__name__)

async def logging_middleware(request: Request, call_next):
    """日志中间件"""
    start_time = time.time()

    logger.info(f"请求开始: {request.method} {request.url.path}")

    response = await call_next(request)

    # 流式响应只统计到响应头返回为止
    process_time = time.time() - start_time

    logger.info(
        f"请求结束: {request.method} {request.url.path} "
        f"状态码: {response.status_code} 处理时间: {process_time:.3f}s"
    )

    response.headers["X-Process-Time"] = str(process_time)

    return response
