"""
FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from fluxradar.api.v1.router import api_router
from fluxradar.config.settings import settings
from fluxradar.core.exceptions import setup_exception_handlers
from fluxradar.core.logging import logger
from fluxradar.middleware.logging import logging_middleware
from fluxradar.schemas.response import HealthResponse
from fluxradar.services.demo_data import demo_resources
from fluxradar.services.notification_service import NotificationChannel
from fluxradar.services.resource_registry import ResourceRegistry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    registry: ResourceRegistry = app.state.registry
    logger.info(f"服务监听: {settings.HOST}:{settings.PORT}, API 前缀: {settings.API_PREFIX}")
    logger.info(f"资源注册表就绪: 集群数={len(registry.cluster_names())}, 资源数={registry.count()}")
    logger.info("🚀 服务器启动完成")
    yield
    logger.info("👋 服务器关闭")


def create_app(
    registry: Optional[ResourceRegistry] = None,
    seed_demo_data: Optional[bool] = None,
) -> FastAPI:
    """创建应用

    Args:
        registry: 资源注册表，为空时新建（测试时可传入）
        seed_demo_data: 新建注册表时是否加载演示数据，默认读取配置
    """
    if registry is None:
        seed = settings.SEED_DEMO_DATA if seed_demo_data is None else seed_demo_data
        registry = ResourceRegistry(
            NotificationChannel(),
            initial=demo_resources() if seed else None,
        )

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="多集群 GitOps 资源状态看板后端",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.channel = registry.channel

    # 添加CORS中间件
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 添加受信任主机中间件
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS,
    )

    # 请求日志中间件
    app.middleware("http")(logging_middleware)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    setup_exception_handlers(app)

    @app.get("/")
    async def root():
        """根路径"""
        return {"message": f"{settings.APP_NAME} API", "version": settings.APP_VERSION}

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """健康检查"""
        state_registry: ResourceRegistry = request.app.state.registry
        return HealthResponse(
            status="ok",
            clusters=len(state_registry.cluster_names()),
            resources=state_registry.count(),
            subscribers=request.app.state.channel.subscriber_count(),
        )

    return app


app = create_app()
