"""DynamicNodeParametersService Port（动态参数解析服务端口）

为什么是 Port？
- 真正的解析逻辑需要节点类型定义和外部 API（凭证、HTTP 客户端等）
- 用例层只依赖这个接口，默认实现在 application/services，测试中可替换为 Mock

所有方法都可能抛出 ParameterResolutionError（或其他异常），调用方原样向上传播。
"""

from typing import Any, Protocol

from src.domain.value_objects.execution_context import ExecutionContext
from src.domain.value_objects.node_parameter_values import (
    NodeListSearchResult,
    NodePropertyOption,
    ResourceMapperFields,
)
from src.domain.value_objects.node_type_reference import NodeTypeReference


class DynamicNodeParametersService(Protocol):
    """动态参数解析服务接口"""

    async def get_options_via_method_name(
        self,
        method_name: str,
        path: str | None,
        context: ExecutionContext,
        node_type: NodeTypeReference,
        current_node_parameters: dict[str, Any],
        credentials: dict[str, Any] | None = None,
    ) -> list[NodePropertyOption]:
        """通过节点声明的 loadOptions 方法名获取选项列表"""
        ...

    async def get_options_via_load_options(
        self,
        load_options: dict[str, Any],
        context: ExecutionContext,
        node_type: NodeTypeReference,
        current_node_parameters: dict[str, Any],
        credentials: dict[str, Any] | None = None,
    ) -> list[NodePropertyOption]:
        """通过声明式 loadOptions 描述（routing 配置）获取选项列表"""
        ...

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
        """资源定位器搜索（listSearch 方法）"""
        ...

    async def get_resource_mapping_fields(
        self,
        method_name: str,
        path: str | None,
        context: ExecutionContext,
        node_type: NodeTypeReference,
        current_node_parameters: dict[str, Any],
        credentials: dict[str, Any] | None = None,
    ) -> ResourceMapperFields | None:
        """资源映射器字段（resourceMapping 方法）"""
        ...
