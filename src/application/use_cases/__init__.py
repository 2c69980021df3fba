"""Application 层用例 - 动态参数解析编排

每个用例：构建执行上下文 → 选择并调用一次解析服务 → 原样返回结果。
"""

from src.application.use_cases.resolve_node_parameter_options import (
    ResolveOptionsInput,
    ResolveOptionsUseCase,
)
from src.application.use_cases.resolve_resource_locator_results import (
    ResolveResourceLocatorResultsInput,
    ResolveResourceLocatorResultsUseCase,
)
from src.application.use_cases.resolve_resource_mapper_fields import (
    ResolveResourceMapperFieldsInput,
    ResolveResourceMapperFieldsUseCase,
)

__all__ = [
    "ResolveOptionsInput",
    "ResolveOptionsUseCase",
    "ResolveResourceLocatorResultsInput",
    "ResolveResourceLocatorResultsUseCase",
    "ResolveResourceMapperFieldsInput",
    "ResolveResourceMapperFieldsUseCase",
]
