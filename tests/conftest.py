"""Pytest 配置文件 - 全局 fixtures"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.domain.value_objects.execution_context import ExecutionContext
from src.infrastructure.auth.jwt_service import JWTService
from src.interfaces.api.container import ApiContainer
from src.interfaces.api.error_handlers import register_exception_handlers
from src.interfaces.api.routes import dynamic_node_parameters


@pytest.fixture
def execution_context() -> ExecutionContext:
    """示例执行上下文"""
    return ExecutionContext(
        user_id="user-123",
        instance_base_url="http://localhost:5678",
        rest_api_url="http://localhost:5678/rest/",
        webhook_base_url="http://localhost:5678/webhook/",
        webhook_waiting_base_url="http://localhost:5678/webhook-waiting/",
        webhook_test_base_url="http://localhost:5678/webhook-test/",
        form_waiting_base_url="http://localhost:5678/form-waiting/",
        timezone="America/New_York",
    )


@pytest.fixture
def context_builder(execution_context: ExecutionContext) -> MagicMock:
    """执行上下文构建器 Mock"""
    builder = MagicMock()
    builder.build = AsyncMock(return_value=execution_context)
    return builder


@pytest.fixture
def resolution_service() -> MagicMock:
    """动态参数解析服务 Mock（默认返回空结果）"""
    service = MagicMock()
    service.get_options_via_method_name = AsyncMock(return_value=[])
    service.get_options_via_load_options = AsyncMock(return_value=[])
    service.get_resource_locator_results = AsyncMock(return_value=None)
    service.get_resource_mapping_fields = AsyncMock(return_value=None)
    return service


@pytest.fixture
def api_app(context_builder: MagicMock, resolution_service: MagicMock) -> FastAPI:
    """只挂载动态参数路由的测试应用（不执行 lifespan）"""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(dynamic_node_parameters.router, prefix="/api")
    test_app.state.container = ApiContainer(
        dynamic_node_parameters_service=resolution_service,
        execution_context_builder=context_builder,
    )
    return test_app


@pytest.fixture
def client(api_app: FastAPI) -> TestClient:
    """FastAPI 测试客户端"""
    return TestClient(api_app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """已登录用户的请求头"""
    token = JWTService.create_access_token("user-123")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def mock_external_http_calls(request):
    """自动Mock外部HTTP调用（仅单元测试）

    单元测试不允许真实的出站请求：httpx.AsyncClient 被替换，
    所有请求返回 200 和 {"mocked": True}。
    """
    test_path = str(request.fspath)
    is_unit_test = "tests/unit" in test_path or "tests\\unit" in test_path

    if not is_unit_test:
        yield
        return

    with patch("httpx.AsyncClient") as mock_httpx_client:
        mock_httpx_response = MagicMock()
        mock_httpx_response.status_code = 200
        mock_httpx_response.json = MagicMock(return_value={"mocked": True})
        mock_httpx_response.text = '{"mocked": true}'

        mock_client_instance = MagicMock()
        mock_client_instance.request = AsyncMock(return_value=mock_httpx_response)

        mock_httpx_client.return_value.__aenter__.return_value = mock_client_instance
        mock_httpx_client.return_value.__aexit__.return_value = None

        yield mock_client_instance
