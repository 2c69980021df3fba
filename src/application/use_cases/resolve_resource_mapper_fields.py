"""ResolveResourceMapperFieldsUseCase - 资源映射器字段"""

import logging
from dataclasses import dataclass

from src.domain.ports.dynamic_node_parameters_service import DynamicNodeParametersService
from src.domain.ports.execution_context_builder import ExecutionContextBuilder
from src.domain.value_objects.dynamic_parameter_request import DynamicParameterRequest
from src.domain.value_objects.node_parameter_values import ResourceMapperFields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolveResourceMapperFieldsInput:
    user_id: str
    request: DynamicParameterRequest
    method_name: str


class ResolveResourceMapperFieldsUseCase:
    """资源映射器字段用例

    返回节点 resourceMapping 方法给出的字段 schema；没有结果时返回 None。
    """

    def __init__(
        self,
        context_builder: ExecutionContextBuilder,
        service: DynamicNodeParametersService,
    ):
        self.context_builder = context_builder
        self.service = service

    async def execute(
        self, input_data: ResolveResourceMapperFieldsInput
    ) -> ResourceMapperFields | None:
        request = input_data.request
        context = await self.context_builder.build(
            input_data.user_id, request.current_node_parameters
        )

        logger.debug(
            "Resolving resource mapper fields via method %s for %s",
            input_data.method_name,
            request.node_type,
        )
        return await self.service.get_resource_mapping_fields(
            input_data.method_name,
            request.path,
            context,
            request.node_type,
            request.current_node_parameters,
            request.credentials,
        )
