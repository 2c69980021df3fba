"""ResolveOptionsUseCase - 解析节点参数选项列表

业务场景：
编辑器打开一个 options 类型的参数时，需要实时从外部 API 拉取可选值。

执行流程：
1. 构建执行上下文（每个请求只构建一次）
2. 选择解析模式：
   - 提供了 method_name：调用节点声明的 loadOptions 方法（优先）
   - 否则提供了 load_options：执行声明式 loadOptions 描述
   - 两者都没有：返回空列表（不是错误）
3. 原样返回解析服务的结果
"""

import logging
from dataclasses import dataclass
from typing import Any

from src.domain.ports.dynamic_node_parameters_service import DynamicNodeParametersService
from src.domain.ports.execution_context_builder import ExecutionContextBuilder
from src.domain.value_objects.dynamic_parameter_request import DynamicParameterRequest
from src.domain.value_objects.node_parameter_values import NodePropertyOption

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolveOptionsInput:
    """解析选项列表的输入参数

    属性说明：
    - user_id: 调用者用户 ID
    - request: 已解码的公共参数
    - method_name: loadOptions 方法名（可选）
    - load_options: 已解码的声明式 loadOptions 描述（可选）
    """

    user_id: str
    request: DynamicParameterRequest
    method_name: str | None = None
    load_options: dict[str, Any] | None = None


class ResolveOptionsUseCase:
    """解析选项列表用例

    依赖：
    - ExecutionContextBuilder: 执行上下文构建器
    - DynamicNodeParametersService: 动态参数解析服务
    """

    def __init__(
        self,
        context_builder: ExecutionContextBuilder,
        service: DynamicNodeParametersService,
    ):
        self.context_builder = context_builder
        self.service = service

    async def execute(self, input_data: ResolveOptionsInput) -> list[NodePropertyOption]:
        """执行用例

        异常：
            ContextBuildError: 执行上下文构建失败
            ParameterResolutionError: 解析服务失败（原样传播）
        """
        request = input_data.request
        context = await self.context_builder.build(
            input_data.user_id, request.current_node_parameters
        )

        if input_data.method_name:
            logger.debug(
                "Resolving options via method %s for %s",
                input_data.method_name,
                request.node_type,
            )
            return await self.service.get_options_via_method_name(
                input_data.method_name,
                request.path,
                context,
                request.node_type,
                request.current_node_parameters,
                request.credentials,
            )

        if input_data.load_options is not None:
            logger.debug("Resolving options via loadOptions descriptor for %s", request.node_type)
            return await self.service.get_options_via_load_options(
                input_data.load_options,
                context,
                request.node_type,
                request.current_node_parameters,
                request.credentials,
            )

        return []
