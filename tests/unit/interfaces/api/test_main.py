"""应用装配测试

验证 create_app / build_container 的组装结果，以及健康检查、CORS、
未分类异常的统一处理。
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from src.application.services.dynamic_node_parameters_service import (
    NodeTypeDynamicParametersService,
)
from src.application.services.execution_context_builder import SettingsExecutionContextBuilder
from src.config import Settings
from src.interfaces.api.container import ApiContainer
from src.interfaces.api.main import build_container, create_app

DEFINITION_YAML = """
name: example.tasks
methods:
  loadOptions:
    getProjects:
      routing:
        request:
          url: https://tasks.test/projects
"""


@pytest.fixture
def app_client(api_app_container) -> TestClient:
    app = create_app()
    app.state.container = api_app_container
    return TestClient(app)


@pytest.fixture
def api_app_container(context_builder, resolution_service):
    return ApiContainer(
        dynamic_node_parameters_service=resolution_service,
        execution_context_builder=context_builder,
    )


class TestHealth:
    def test_health_check(self, app_client: TestClient):
        response = app_client.get("/api/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_version_info(self, app_client: TestClient):
        response = app_client.get("/api/health/version")

        assert response.status_code == 200
        assert "version" in response.json()


class TestCORSConfiguration:
    def test_cors_allows_configured_origin(self, app_client: TestClient):
        response = app_client.options(
            "/api/health/",
            headers={
                "Origin": "http://localhost:5678",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers.get("access-control-allow-origin") == "http://localhost:5678"


class TestBuildContainer:
    def test_registers_yaml_node_types(self, tmp_path):
        (tmp_path / "tasks.yaml").write_text(DEFINITION_YAML, encoding="utf-8")

        container = build_container(Settings(node_types_dir=str(tmp_path)))

        service = container.dynamic_node_parameters_service
        assert isinstance(service, NodeTypeDynamicParametersService)
        assert service.registry.has("example.tasks", 1)
        assert isinstance(container.execution_context_builder, SettingsExecutionContextBuilder)

    def test_missing_directory_gives_empty_registry(self, tmp_path):
        container = build_container(Settings(node_types_dir=str(tmp_path / "missing")))

        assert len(container.dynamic_node_parameters_service.registry) == 0


class TestUnexpectedErrors:
    def test_unclassified_error_returns_generic_500(
        self, api_app_container, resolution_service, auth_headers
    ):
        resolution_service.get_options_via_method_name = AsyncMock(
            side_effect=KeyError("secret-internal-detail")
        )
        app = create_app()
        app.state.container = api_app_container
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get(
            "/api/dynamic-node-parameters/options",
            params={
                "nodeTypeAndVersion": '{"name": "example.tasks", "version": 1}',
                "currentNodeParameters": "{}",
                "methodName": "getProjects",
            },
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "secret-internal-detail" not in response.text

    def test_missing_container_is_generic_500(self, auth_headers):
        app = create_app()
        client = TestClient(app)

        response = client.get(
            "/api/dynamic-node-parameters/options",
            params={"nodeTypeAndVersion": "{}", "currentNodeParameters": "{}"},
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to build execution context"}
