"""NodeTypeDynamicParametersService - 基于节点类型注册表的动态参数解析

DynamicNodeParametersService Port 的默认实现：
1. 按 NodeTypeReference 在注册表中查找节点类型
2. 在对应方法表（loadOptions / listSearch / resourceMapping）中按方法名查找方法
3. Python 方法：直接 await；声明式方法：交给 DeclarativeRequestRunner

凭证引用原样放入 NodeMethodContext，本服务不读取其内容。
"""

import logging
from typing import Any

from src.application.services.declarative_request_runner import DeclarativeRequestRunner
from src.domain.entities.node_type_definition import (
    NodeMethod,
    NodeMethodContext,
    NodeMethodKind,
    NodeTypeDefinition,
)
from src.domain.exceptions import NodeMethodNotFoundError
from src.domain.ports.node_type_registry import NodeTypeRegistry
from src.domain.value_objects.execution_context import ExecutionContext
from src.domain.value_objects.node_parameter_values import (
    NodeListSearchResult,
    NodePropertyOption,
    ResourceMapperFields,
)
from src.domain.value_objects.node_type_reference import NodeTypeReference

logger = logging.getLogger(__name__)


class NodeTypeDynamicParametersService:
    """基于节点类型注册表的解析服务"""

    def __init__(self, registry: NodeTypeRegistry, request_runner: DeclarativeRequestRunner):
        self.registry = registry
        self.request_runner = request_runner

    async def get_options_via_method_name(
        self,
        method_name: str,
        path: str | None,
        context: ExecutionContext,
        node_type: NodeTypeReference,
        current_node_parameters: dict[str, Any],
        credentials: dict[str, Any] | None = None,
    ) -> list[NodePropertyOption]:
        definition, method = self._get_method(
            node_type, NodeMethodKind.LOAD_OPTIONS, method_name
        )
        method_context = NodeMethodContext(
            node_type=node_type.name,
            path=path,
            context=context,
            current_node_parameters=current_node_parameters,
            credentials=credentials,
        )
        return await self._invoke(definition, method, method_context)

    async def get_options_via_load_options(
        self,
        load_options: dict[str, Any],
        context: ExecutionContext,
        node_type: NodeTypeReference,
        current_node_parameters: dict[str, Any],
        credentials: dict[str, Any] | None = None,
    ) -> list[NodePropertyOption]:
        # 请求方传入的描述只能访问节点类型 baseURL 之下的地址
        definition = self.registry.get_by_reference(node_type)
        return await self.request_runner.run(
            load_options,
            current_node_parameters,
            base_url=definition.base_url,
            restrict_to_base_url=True,
        )

    async def get_resource_locator_results(
        self,
        method_name: str,
        path: str | None,
        context: ExecutionContext,
        node_type: NodeTypeReference,
        current_node_parameters: dict[str, Any],
        credentials: dict[str, Any] | None = None,
        filter: str | None = None,
        pagination_token: str | None = None,
    ) -> NodeListSearchResult | None:
        definition, method = self._get_method(
            node_type, NodeMethodKind.LIST_SEARCH, method_name
        )
        method_context = NodeMethodContext(
            node_type=node_type.name,
            path=path,
            context=context,
            current_node_parameters=current_node_parameters,
            credentials=credentials,
            filter=filter,
            pagination_token=pagination_token,
        )
        if isinstance(method, dict):
            return await self.request_runner.search(
                method,
                current_node_parameters,
                extra_scope=_search_scope(method_context),
                base_url=definition.base_url,
            )
        return await method(method_context)

    async def get_resource_mapping_fields(
        self,
        method_name: str,
        path: str | None,
        context: ExecutionContext,
        node_type: NodeTypeReference,
        current_node_parameters: dict[str, Any],
        credentials: dict[str, Any] | None = None,
    ) -> ResourceMapperFields | None:
        definition, method = self._get_method(
            node_type, NodeMethodKind.RESOURCE_MAPPING, method_name
        )
        method_context = NodeMethodContext(
            node_type=node_type.name,
            path=path,
            context=context,
            current_node_parameters=current_node_parameters,
            credentials=credentials,
        )
        result = await self._invoke(definition, method, method_context)
        if isinstance(method, dict):
            return {"fields": result}
        return result

    def _get_method(
        self, node_type: NodeTypeReference, kind: NodeMethodKind, method_name: str
    ) -> tuple[NodeTypeDefinition, NodeMethod]:
        definition = self.registry.get_by_reference(node_type)
        method = definition.get_method(kind, method_name)
        if method is None:
            raise NodeMethodNotFoundError(node_type.name, kind.value, method_name)
        return definition, method

    async def _invoke(
        self,
        definition: NodeTypeDefinition,
        method: NodeMethod,
        method_context: NodeMethodContext,
    ) -> Any:
        if isinstance(method, dict):
            return await self.request_runner.run(
                method,
                method_context.current_node_parameters,
                extra_scope=_search_scope(method_context),
                base_url=definition.base_url,
            )
        return await method(method_context)


def _search_scope(method_context: NodeMethodContext) -> dict[str, Any]:
    return {
        "filter": method_context.filter,
        "paginationToken": method_context.pagination_token,
    }
