"""
Registry Dependencies
"""

from fastapi import Request

from fluxradar.services.notification_service import NotificationChannel
from fluxradar.services.resource_registry import ResourceRegistry

def get_registry(request: Request) -> ResourceRegistry:
    """获取应用持有的资源注册表"""
    return request.app.state.registry

def get_channel(request: Request) -> NotificationChannel:
    """获取应用持有的变更通知通道"""
    return request.app.state.channel
