"""HTTPHttpxAdapter 单元测试

httpx.AsyncClient 已由 conftest 中的 mock_external_http_calls 替换，
这里只验证请求参数的传递和错误状态码的映射。
"""

import httpx
import pytest

from src.domain.exceptions import ParameterResolutionError
from src.infrastructure.adapters.http_httpx_adapter import HTTPHttpxAdapter

URL = "https://api.example.com/items"


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", URL)
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


class TestHTTPHttpxAdapter:
    @pytest.mark.asyncio
    async def test_returns_response_json(self, mock_external_http_calls):
        result = await HTTPHttpxAdapter().request(
            "get", URL, params={"page": 1}, headers={"Accept": "application/json"}
        )

        assert result == {"mocked": True}
        mock_external_http_calls.request.assert_awaited_once_with(
            method="GET",
            url=URL,
            params={"page": 1},
            headers={"Accept": "application/json"},
            json=None,
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("upstream_status", "expected_status"), [(404, 400), (502, 500)])
    async def test_upstream_status_is_mapped(
        self, mock_external_http_calls, upstream_status, expected_status
    ):
        response = mock_external_http_calls.request.return_value
        response.raise_for_status.side_effect = _status_error(upstream_status)

        with pytest.raises(ParameterResolutionError) as exc_info:
            await HTTPHttpxAdapter().request("GET", URL)

        assert exc_info.value.status_code == expected_status
        assert str(upstream_status) in exc_info.value.message

    @pytest.mark.asyncio
    async def test_network_error_is_server_error(self, mock_external_http_calls):
        mock_external_http_calls.request.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(ParameterResolutionError) as exc_info:
            await HTTPHttpxAdapter().request("GET", URL)

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_timeout_is_server_error(self, mock_external_http_calls):
        mock_external_http_calls.request.side_effect = httpx.ReadTimeout("too slow")

        with pytest.raises(ParameterResolutionError, match="timed out") as exc_info:
            await HTTPHttpxAdapter().request("GET", URL, timeout=2)

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_invalid_json_is_server_error(self, mock_external_http_calls):
        response = mock_external_http_calls.request.return_value
        response.json.side_effect = ValueError("Expecting value")

        with pytest.raises(ParameterResolutionError, match="not valid JSON"):
            await HTTPHttpxAdapter().request("GET", URL)
