"""
Response Schemas
"""

from pydantic import BaseModel

class MessageResponse(BaseModel):
    """成功响应模式"""
    message: str

class ErrorResponse(BaseModel):
    """错误响应模式"""
    message: str
    error: str

class HealthResponse(BaseModel):
    """健康检查响应"""
    status: str
    clusters: int
    resources: int
    subscribers: int
