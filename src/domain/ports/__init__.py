"""领域层 Ports - 定义领域层需要的外部依赖接口

- DynamicNodeParametersService: 动态参数解析服务
- ExecutionContextBuilder: 执行上下文构建器
- HTTPClientPort: 声明式请求使用的 HTTP 客户端
- NodeTypeRegistry: 节点类型注册表
"""

from src.domain.ports.dynamic_node_parameters_service import DynamicNodeParametersService
from src.domain.ports.execution_context_builder import ExecutionContextBuilder
from src.domain.ports.http_client_port import HTTPClientPort
from src.domain.ports.node_type_registry import NodeTypeRegistry

__all__ = [
    "DynamicNodeParametersService",
    "ExecutionContextBuilder",
    "HTTPClientPort",
    "NodeTypeRegistry",
]
