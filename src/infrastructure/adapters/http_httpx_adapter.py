"""HTTP Httpx Adapter - 声明式请求的真实HTTP实现.

职责:
- 使用httpx执行外部请求
- 把上游错误转换为 ParameterResolutionError:
  - 上游 4xx -> 400（请求参数问题，通常是用户配置/凭证问题）
  - 上游 5xx、网络错误、超时 -> 500
"""

from typing import Any

from src.domain.exceptions import ParameterResolutionError


class HTTPHttpxAdapter:
    """HTTP Httpx实现 - HTTPClientPort 的生产实现."""

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
        """执行HTTP请求并返回响应JSON.

        异常:
            ParameterResolutionError: HTTP错误状态码/网络错误/超时/响应非JSON
        """
        # 延迟导入httpx
        import httpx

        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.request(
                    method=method.upper(),
                    url=url,
                    params=params,
                    headers=headers,
                    json=json_body,
                )
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            status_code = 400 if e.response.status_code < 500 else 500
            raise ParameterResolutionError(
                f"Request to {url} failed with status {e.response.status_code}",
                status_code=status_code,
            ) from e

        except httpx.TimeoutException as e:
            raise ParameterResolutionError(
                f"Request to {url} timed out after {timeout}s", status_code=500
            ) from e

        except httpx.HTTPError as e:
            raise ParameterResolutionError(f"Request to {url} failed: {e}", status_code=500) from e

        except ValueError as e:
            raise ParameterResolutionError(
                f"Response from {url} is not valid JSON", status_code=500
            ) from e
