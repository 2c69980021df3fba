"""Infrastructure Adapters Package

提供 Domain Port 的 Infrastructure 层适配器实现。
遵循 Ports and Adapters 架构模式。
"""

from src.infrastructure.adapters.http_httpx_adapter import HTTPHttpxAdapter
from src.infrastructure.adapters.http_mock_adapter import HTTPMockAdapter

__all__ = [
    "HTTPHttpxAdapter",
    "HTTPMockAdapter",
]
