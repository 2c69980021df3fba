"""HTTP客户端抽象接口(Domain Port) - 声明式 loadOptions 使用.

职责:
- 定义执行一次外部请求的标准接口
- 隔离httpx与测试用mock实现

设计原则:
- 使用Protocol实现结构化子类型
- 不依赖任何具体HTTP库
"""

from typing import Any, Protocol


class HTTPClientPort(Protocol):
    """HTTP客户端抽象接口(Domain Port)."""

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
        """执行HTTP请求并返回解析后的JSON.

        参数:
            method: HTTP方法, 大小写不敏感
            url: 完整请求URL
            params: 查询参数(可选)
            headers: 请求头(可选)
            json_body: JSON请求体(可选)
            timeout: 超时时间(秒)

        异常:
            ParameterResolutionError: 上游返回错误状态码/网络错误/超时
        """
        ...
