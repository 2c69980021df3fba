"""NodeTypeDefinition - 节点类型定义

一个节点类型（名称 + 支持的版本）声明三类动态参数方法：
- load_options: 选项列表（返回 list[NodePropertyOption]）
- list_search: 资源定位器搜索（返回 NodeListSearchResult）
- resource_mapping: 资源映射器字段（返回 ResourceMapperFields）

每个方法可以是：
1. Python 异步函数：接收 NodeMethodContext
2. 声明式请求描述（dict）：由 DeclarativeRequestRunner 执行
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.domain.value_objects.execution_context import ExecutionContext


class NodeMethodKind(str, Enum):
    """动态参数方法分类（名称与节点定义中的 methods 键一致）"""

    LOAD_OPTIONS = "loadOptions"
    LIST_SEARCH = "listSearch"
    RESOURCE_MAPPING = "resourceMapping"


@dataclass(frozen=True, slots=True)
class NodeMethodContext:
    """传给 Python 节点方法的调用上下文

    credentials 原样来自请求，方法自行决定如何使用。
    """

    node_type: str
    path: str | None
    context: ExecutionContext
    current_node_parameters: dict[str, Any]
    credentials: dict[str, Any] | None = None
    filter: str | None = None
    pagination_token: str | None = None

    def get_parameter(self, name: str, default: Any = None) -> Any:
        """按点分路径读取当前节点参数"""
        value: Any = self.current_node_parameters
        for part in name.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value


NodeMethodFunc = Callable[[NodeMethodContext], Awaitable[Any]]
NodeMethod = NodeMethodFunc | dict[str, Any]


@dataclass
class NodeTypeDefinition:
    """节点类型定义

    属性说明：
    - name: 节点类型名称
    - versions: 支持的版本
    - methods: 方法表 {NodeMethodKind: {方法名: NodeMethod}}
    - base_url: 声明式请求的默认 baseURL（requestDefaults.baseURL）；
      请求方传入的 loadOptions 描述只能访问该地址之下的资源，为 None 时不接受
    """

    name: str
    versions: tuple[float, ...] = (1,)
    methods: dict[NodeMethodKind, dict[str, NodeMethod]] = field(default_factory=dict)
    base_url: str | None = None

    def supports(self, version: float) -> bool:
        return version in self.versions

    def get_method(self, kind: NodeMethodKind, method_name: str) -> NodeMethod | None:
        return self.methods.get(kind, {}).get(method_name)

    def add_method(self, kind: NodeMethodKind, method_name: str, method: NodeMethod) -> None:
        self.methods.setdefault(kind, {})[method_name] = method
