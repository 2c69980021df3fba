"""Domain 值对象

导出所有领域值对象，方便其他模块导入
"""

from src.domain.value_objects.dynamic_parameter_request import DynamicParameterRequest
from src.domain.value_objects.execution_context import ExecutionContext
from src.domain.value_objects.node_type_reference import NodeTypeReference

__all__ = ["DynamicParameterRequest", "ExecutionContext", "NodeTypeReference"]
