"""ResolveResourceLocatorResultsUseCase - 资源定位器搜索

业务场景：
资源定位器（resource locator）参数的"从列表选择"模式，按关键字和分页令牌搜索外部资源。

method_name 必需，由 API 层在解码其他参数之前校验。
"""

import logging
from dataclasses import dataclass

from src.domain.ports.dynamic_node_parameters_service import DynamicNodeParametersService
from src.domain.ports.execution_context_builder import ExecutionContextBuilder
from src.domain.value_objects.dynamic_parameter_request import DynamicParameterRequest
from src.domain.value_objects.node_parameter_values import NodeListSearchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolveResourceLocatorResultsInput:
    user_id: str
    request: DynamicParameterRequest
    method_name: str
    filter: str | None = None
    pagination_token: str | None = None


class ResolveResourceLocatorResultsUseCase:
    """资源定位器搜索用例"""

    def __init__(
        self,
        context_builder: ExecutionContextBuilder,
        service: DynamicNodeParametersService,
    ):
        self.context_builder = context_builder
        self.service = service

    async def execute(
        self, input_data: ResolveResourceLocatorResultsInput
    ) -> NodeListSearchResult | None:
        request = input_data.request
        context = await self.context_builder.build(
            input_data.user_id, request.current_node_parameters
        )

        logger.debug(
            "Resolving resource locator results via method %s for %s",
            input_data.method_name,
            request.node_type,
        )
        return await self.service.get_resource_locator_results(
            input_data.method_name,
            request.path,
            context,
            request.node_type,
            request.current_node_parameters,
            request.credentials,
            input_data.filter,
            input_data.pagination_token,
        )
