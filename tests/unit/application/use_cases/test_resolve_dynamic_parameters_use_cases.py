"""动态参数解析用例单元测试

测试策略：
- 使用 Mock 的上下文构建器和解析服务
- 验证每个用例只构建一次上下文、只调用一次解析服务，并原样返回结果
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.use_cases import (
    ResolveOptionsInput,
    ResolveOptionsUseCase,
    ResolveResourceLocatorResultsInput,
    ResolveResourceLocatorResultsUseCase,
    ResolveResourceMapperFieldsInput,
    ResolveResourceMapperFieldsUseCase,
)
from src.domain.exceptions import ContextBuildError, ParameterResolutionError
from src.domain.value_objects.dynamic_parameter_request import DynamicParameterRequest
from src.domain.value_objects.node_type_reference import NodeTypeReference

NODE_TYPE = NodeTypeReference(name="example.githubIssues", version=1)
CREDENTIALS = {"githubApi": {"id": "7", "name": "GitHub account"}}


@pytest.fixture
def parameter_request() -> DynamicParameterRequest:
    return DynamicParameterRequest(
        node_type=NODE_TYPE,
        current_node_parameters={"owner": "octocat"},
        credentials=CREDENTIALS,
        path="parameters.repository",
    )


class TestResolveOptionsUseCase:
    @pytest.mark.asyncio
    async def test_method_name_mode(
        self, context_builder, resolution_service, execution_context, parameter_request
    ):
        options = [{"name": "Hello-World", "value": "Hello-World"}]
        resolution_service.get_options_via_method_name.return_value = options
        use_case = ResolveOptionsUseCase(context_builder, resolution_service)

        result = await use_case.execute(
            ResolveOptionsInput(
                user_id="user-123",
                request=parameter_request,
                method_name="getRepositories",
                load_options={"routing": {}},
            )
        )

        assert result is options
        context_builder.build.assert_awaited_once_with("user-123", {"owner": "octocat"})
        resolution_service.get_options_via_method_name.assert_awaited_once_with(
            "getRepositories",
            "parameters.repository",
            execution_context,
            NODE_TYPE,
            {"owner": "octocat"},
            CREDENTIALS,
        )
        resolution_service.get_options_via_load_options.assert_not_called()

    @pytest.mark.asyncio
    async def test_load_options_mode(
        self, context_builder, resolution_service, execution_context, parameter_request
    ):
        descriptor = {"routing": {"request": {"url": "https://api.github.com/user/repos"}}}
        use_case = ResolveOptionsUseCase(context_builder, resolution_service)

        await use_case.execute(
            ResolveOptionsInput(
                user_id="user-123", request=parameter_request, load_options=descriptor
            )
        )

        resolution_service.get_options_via_load_options.assert_awaited_once_with(
            descriptor, execution_context, NODE_TYPE, {"owner": "octocat"}, CREDENTIALS
        )
        resolution_service.get_options_via_method_name.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_mode_returns_empty_list(
        self, context_builder, resolution_service, parameter_request
    ):
        use_case = ResolveOptionsUseCase(context_builder, resolution_service)

        result = await use_case.execute(
            ResolveOptionsInput(user_id="user-123", request=parameter_request)
        )

        assert result == []
        context_builder.build.assert_awaited_once()
        resolution_service.get_options_via_method_name.assert_not_called()
        resolution_service.get_options_via_load_options.assert_not_called()

    @pytest.mark.asyncio
    async def test_context_build_failure_stops_before_resolution(
        self, context_builder, resolution_service, parameter_request
    ):
        context_builder.build.side_effect = ContextBuildError("unknown user")
        use_case = ResolveOptionsUseCase(context_builder, resolution_service)

        with pytest.raises(ContextBuildError):
            await use_case.execute(
                ResolveOptionsInput(
                    user_id="user-123", request=parameter_request, method_name="getRepositories"
                )
            )

        resolution_service.get_options_via_method_name.assert_not_called()

    @pytest.mark.asyncio
    async def test_resolution_error_propagates_unchanged(
        self, context_builder, resolution_service, parameter_request
    ):
        error = ParameterResolutionError("rate limited", status_code=429)
        resolution_service.get_options_via_method_name.side_effect = error
        use_case = ResolveOptionsUseCase(context_builder, resolution_service)

        with pytest.raises(ParameterResolutionError) as exc_info:
            await use_case.execute(
                ResolveOptionsInput(
                    user_id="user-123", request=parameter_request, method_name="getRepositories"
                )
            )

        assert exc_info.value is error


class TestResolveResourceLocatorResultsUseCase:
    @pytest.mark.asyncio
    async def test_passes_filter_and_pagination_token(
        self, context_builder, resolution_service, execution_context, parameter_request
    ):
        search_result = {"results": [], "paginationToken": "3"}
        resolution_service.get_resource_locator_results.return_value = search_result
        use_case = ResolveResourceLocatorResultsUseCase(context_builder, resolution_service)

        result = await use_case.execute(
            ResolveResourceLocatorResultsInput(
                user_id="user-123",
                request=parameter_request,
                method_name="searchRepositories",
                filter="hello",
                pagination_token="2",
            )
        )

        assert result is search_result
        resolution_service.get_resource_locator_results.assert_awaited_once_with(
            "searchRepositories",
            "parameters.repository",
            execution_context,
            NODE_TYPE,
            {"owner": "octocat"},
            CREDENTIALS,
            "hello",
            "2",
        )


class TestResolveResourceMapperFieldsUseCase:
    @pytest.mark.asyncio
    async def test_returns_none_when_service_has_no_result(
        self, context_builder, resolution_service, parameter_request
    ):
        use_case = ResolveResourceMapperFieldsUseCase(context_builder, resolution_service)

        result = await use_case.execute(
            ResolveResourceMapperFieldsInput(
                user_id="user-123", request=parameter_request, method_name="getColumns"
            )
        )

        assert result is None
        context_builder.build.assert_awaited_once()
        resolution_service.get_resource_mapping_fields.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_credentials_are_passed_without_modification(
        self, execution_context, parameter_request
    ):
        context_builder = MagicMock()
        context_builder.build = AsyncMock(return_value=execution_context)
        service = MagicMock()
        service.get_resource_mapping_fields = AsyncMock(return_value={"fields": []})
        use_case = ResolveResourceMapperFieldsUseCase(context_builder, service)

        await use_case.execute(
            ResolveResourceMapperFieldsInput(
                user_id="user-123", request=parameter_request, method_name="getColumns"
            )
        )

        passed_credentials = service.get_resource_mapping_fields.await_args.args[5]
        assert passed_credentials is CREDENTIALS
        assert CREDENTIALS == {"githubApi": {"id": "7", "name": "GitHub account"}}
