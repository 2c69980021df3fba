"""HTTP Mock Adapter - 本地mock响应实现.

职责:
- 按URL正则返回预设响应
- 记录所有请求, 便于断言
- 完全确定性, 无网络

适用场景:
- 声明式 loadOptions 的单元测试
- 无网络环境的本地演示
"""

import re
from typing import Any

from src.domain.exceptions import ParameterResolutionError


class HTTPMockAdapter:
    """HTTP Mock实现 - 本地pattern匹配."""

    def __init__(self, mock_responses: dict[str, Any] | None = None) -> None:
        """初始化Mock Adapter.

        参数:
            mock_responses: URL正则pattern -> 响应JSON的映射
        """
        self.mock_responses = mock_responses or {}
        self.requests: list[dict[str, Any]] = []

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        timeout: float = 30.0,
    ) -> Any:
        """执行mock HTTP请求.

        异常:
            ParameterResolutionError: URL未被mock覆盖（500）
        """
        self.requests.append(
            {
                "method": method.upper(),
                "url": url,
                "params": params,
                "headers": headers,
                "json_body": json_body,
            }
        )

        # 按顺序匹配pattern
        for pattern, response in self.mock_responses.items():
            if re.match(pattern, url):
                return response

        raise ParameterResolutionError(f"Unmocked URL: {url}", status_code=500)
