"""FastAPI 应用入口"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.application.services.declarative_request_runner import DeclarativeRequestRunner
from src.application.services.dynamic_node_parameters_service import (
    NodeTypeDynamicParametersService,
)
from src.application.services.execution_context_builder import SettingsExecutionContextBuilder
from src.config import Settings, settings
from src.domain.ports.node_type_registry import NodeTypeRegistry
from src.infrastructure.adapters.http_httpx_adapter import HTTPHttpxAdapter
from src.infrastructure.definitions.yaml_node_type_source import YamlNodeTypeSource
from src.infrastructure.logging_config import configure_logging
from src.interfaces.api.container import ApiContainer
from src.interfaces.api.error_handlers import register_exception_handlers
from src.interfaces.api.routes import dynamic_node_parameters, health

logger = logging.getLogger(__name__)


def _build_registry(app_settings: Settings) -> NodeTypeRegistry:
    registry = NodeTypeRegistry()
    definitions_dir = Path(app_settings.node_types_dir)
    if not definitions_dir.exists():
        logger.warning("Node types directory %s not found, registry is empty", definitions_dir)
        return registry

    for definition in YamlNodeTypeSource(definitions_dir=definitions_dir).load():
        registry.register(definition)
    logger.info("Loaded %d node type definitions from %s", len(registry), definitions_dir)
    return registry


def build_container(app_settings: Settings) -> ApiContainer:
    """组装解析服务与执行上下文构建器"""
    runner = DeclarativeRequestRunner(
        http_client=HTTPHttpxAdapter(),
        timeout=app_settings.request_timeout,
    )
    return ApiContainer(
        dynamic_node_parameters_service=NodeTypeDynamicParametersService(
            registry=_build_registry(app_settings),
            request_runner=runner,
        ),
        execution_context_builder=SettingsExecutionContextBuilder.from_settings(app_settings),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.log_level, settings.log_format)
    logger.info("%s v%s starting (env=%s)", settings.app_name, settings.app_version, settings.env)

    # 测试中可能已经注入了容器
    if getattr(app.state, "container", None) is None:
        app.state.container = build_container(settings)

    try:
        yield
    finally:
        logger.info("%s shutting down", settings.app_name)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="编辑期动态节点参数解析服务",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/", tags=["Root"])
    async def root() -> JSONResponse:
        return JSONResponse(
            content={
                "message": f"欢迎使用 {settings.app_name}",
                "version": settings.app_version,
            }
        )

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(dynamic_node_parameters.router, prefix=settings.api_prefix)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.interfaces.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
