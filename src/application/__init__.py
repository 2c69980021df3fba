"""应用层 - 用例编排

Application 层职责：
1. 用例编排：构建执行上下文，选择解析模式，调用解析服务
2. 默认服务实现：节点类型解析服务、执行上下文构建器、声明式请求执行器

设计原则：
- 依赖倒置：依赖 Port 接口，不依赖具体实现
- 无框架依赖：不依赖 FastAPI
"""

from src.application.use_cases import (
    ResolveOptionsInput,
    ResolveOptionsUseCase,
    ResolveResourceLocatorResultsInput,
    ResolveResourceLocatorResultsUseCase,
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
