"""DeclarativeRequestRunner - 执行声明式 loadOptions 描述

描述格式：
    {
        "routing": {
            "request": {"method": "GET", "baseURL": "...", "url": "/items", "qs": {...}},
            "output": {
                "postReceive": [
                    {"type": "rootProperty", "properties": {"property": "data"}},
                    {"type": "filter", "properties": {
                        "pass": "={{ $responseItem.state == \"open\" }}",
                    }},
                    {"type": "setKeyValue", "properties": {
                        "name": "={{ $responseItem.title }}",
                        "value": "={{ $responseItem.id }}",
                    }},
                    {"type": "sort", "properties": {"key": "name"}},
                ],
                "paginationToken": "={{ $response.next_cursor }}",
            },
        }
    }

模板变量：
- $parameter.<路径>: 当前节点参数
- $responseItem.<路径>: postReceive 中的单个响应条目
- $response.<路径>: 原始响应（仅 paginationToken）
- $filter / $paginationToken: 资源定位器搜索参数

表达式可以与 JSON 字面量比较：{{ $responseItem.state == "open" }}（支持 ==、!=、===、!==）。

请求地址：
- 节点类型声明的方法（可信）：baseURL 缺省时使用节点类型的 requestDefaults.baseURL
- 请求方传入的描述（restrict_to_base_url=True）：最终地址必须位于节点类型的 baseURL 之下
"""

import json
import logging
import re
from typing import Any
from urllib.parse import urlparse

from src.domain.exceptions import ParameterResolutionError
from src.domain.ports.http_client_port import HTTPClientPort

logger = logging.getLogger(__name__)

_TEMPLATE = re.compile(
    r"\{\{\s*\$(\w+)(?:\.([\w.]+))?\s*(?:(===|!==|==|!=)\s*(.+?))?\s*\}\}"
)


def _invalid(message: str) -> ParameterResolutionError:
    return ParameterResolutionError(message, status_code=400)


def _lookup(data: Any, dotted_path: str | None) -> Any:
    if not dotted_path:
        return data
    value = data
    for part in dotted_path.split("."):
        if isinstance(value, dict):
            value = value.get(part)
        elif isinstance(value, list) and part.isdigit() and int(part) < len(value):
            value = value[int(part)]
        else:
            return None
    return value


def _parse_literal(literal: str) -> Any:
    literal = literal.strip()
    if len(literal) >= 2 and literal[0] == literal[-1] == "'":
        return literal[1:-1]
    try:
        return json.loads(literal)
    except ValueError:
        raise _invalid(f"Unsupported comparison value in expression: {literal}")


def render_template(value: Any, scope: dict[str, Any]) -> Any:
    """递归替换模板表达式

    整个字符串只有一个表达式时保留原始类型（数字、布尔等），
    否则按字符串拼接。以 "=" 开头的表达式与不带 "=" 等价。

    异常：
        ParameterResolutionError: 比较表达式的字面量无法解析（400）
    """
    if isinstance(value, dict):
        return {key: render_template(item, scope) for key, item in value.items()}
    if isinstance(value, list):
        return [render_template(item, scope) for item in value]
    if not isinstance(value, str):
        return value

    text = value[1:] if value.startswith("={{") else value

    def resolve(match: re.Match[str]) -> Any:
        resolved = _lookup(scope.get(match.group(1)), match.group(2))
        operator = match.group(3)
        if operator is None:
            return resolved
        equal = resolved == _parse_literal(match.group(4))
        return equal if operator in ("==", "===") else not equal

    whole = _TEMPLATE.fullmatch(text.strip())
    if whole:
        return resolve(whole)

    def substitute(match: re.Match[str]) -> str:
        resolved = resolve(match)
        return "" if resolved is None else str(resolved)

    return _TEMPLATE.sub(substitute, text)


def _is_absolute(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme) or url.startswith("//")


def _join(base: str, path: str) -> str:
    if not base or not path:
        return base or path
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def _is_within(url: str, base_url: str) -> bool:
    target = urlparse(url)
    base = urlparse(base_url)
    if target.scheme.lower() != base.scheme.lower():
        return False
    if (target.hostname or "").lower() != (base.hostname or "").lower():
        return False
    if target.port != base.port or target.username or target.password:
        return False
    base_path = base.path.rstrip("/")
    return target.path == base_path or target.path.startswith(f"{base_path}/")


def _optional_dict(container: dict[str, Any], key: str, where: str) -> dict[str, Any] | None:
    value = container.get(key)
    if value is not None and not isinstance(value, dict):
        raise _invalid(f"{where}.{key} must be an object")
    return value


class DeclarativeRequestRunner:
    """声明式请求执行器

    依赖：
    - HTTPClientPort: 执行外部请求（生产环境为 httpx 实现）

    描述中任何结构错误都按客户端错误（400）处理。
    """

    def __init__(self, http_client: HTTPClientPort, timeout: float = 30.0):
        self._http_client = http_client
        self._timeout = timeout

    async def run(
        self,
        descriptor: dict[str, Any],
        current_node_parameters: dict[str, Any],
        extra_scope: dict[str, Any] | None = None,
        *,
        base_url: str | None = None,
        restrict_to_base_url: bool = False,
    ) -> list[Any]:
        """执行描述中的请求，并按 postReceive 处理响应

        参数：
            base_url: 节点类型的 requestDefaults.baseURL
            restrict_to_base_url: 请求地址必须位于 base_url 之下（请求方传入的描述）

        返回：
            处理后的条目列表

        异常：
            ParameterResolutionError: 描述无效或地址越界（400），外部请求失败
        """
        items, _ = await self._execute(
            descriptor, current_node_parameters, extra_scope, base_url, restrict_to_base_url
        )
        return items

    async def search(
        self,
        descriptor: dict[str, Any],
        current_node_parameters: dict[str, Any],
        extra_scope: dict[str, Any] | None = None,
        *,
        base_url: str | None = None,
    ) -> dict[str, Any]:
        """执行资源定位器搜索描述

        返回：
            {"results": [...]}，output.paginationToken 渲染出非空值时附带 paginationToken
        """
        items, token = await self._execute(
            descriptor, current_node_parameters, extra_scope, base_url, False
        )
        result: dict[str, Any] = {"results": items}
        if token is not None and token != "":
            result["paginationToken"] = token
        return result

    async def _execute(
        self,
        descriptor: Any,
        current_node_parameters: dict[str, Any],
        extra_scope: dict[str, Any] | None,
        base_url: str | None,
        restrict_to_base_url: bool,
    ) -> tuple[list[Any], Any]:
        routing = descriptor.get("routing") if isinstance(descriptor, dict) else None
        if not isinstance(routing, dict) or not isinstance(routing.get("request"), dict):
            raise _invalid("loadOptions descriptor must contain routing.request")

        output = _optional_dict(routing, "output", "routing") or {}
        actions = output.get("postReceive") or []
        if not isinstance(actions, list):
            raise _invalid("routing.output.postReceive must be a list")

        scope = {"parameter": current_node_parameters, **(extra_scope or {})}
        request = render_template(routing["request"], scope)

        url = self._resolve_url(request, base_url, restrict_to_base_url)
        method = request.get("method") or "GET"
        if not isinstance(method, str):
            raise _invalid("routing.request.method must be a string")

        params = _optional_dict(request, "qs", "routing.request")
        headers = _optional_dict(request, "headers", "routing.request")

        logger.debug("Executing declarative request %s %s", method.upper(), url)
        response = await self._http_client.request(
            method.upper(),
            url,
            params=params,
            headers=headers,
            json_body=request.get("body"),
            timeout=self._timeout,
        )

        items = self._post_receive(response, actions, scope)
        token = None
        if output.get("paginationToken") is not None:
            token = render_template(output["paginationToken"], {**scope, "response": response})
        return items, token

    def _resolve_url(
        self, request: dict[str, Any], base_url: str | None, restrict_to_base_url: bool
    ) -> str:
        request_base = request.get("baseURL") or ""
        path = request.get("url") or ""
        if not isinstance(request_base, str) or not isinstance(path, str):
            raise _invalid("routing.request.baseURL and url must be strings")

        if _is_absolute(path):
            url = path
        else:
            url = _join(request_base or base_url or "", path)
        if not url:
            raise _invalid("loadOptions descriptor does not define a request URL")

        if restrict_to_base_url:
            if not base_url:
                raise _invalid("Node type does not accept loadOptions request descriptors")
            if not _is_within(url, base_url):
                raise _invalid(f"Request URL {url} is outside {base_url}")
        return url

    def _post_receive(
        self, response: Any, actions: list[Any], scope: dict[str, Any]
    ) -> list[Any]:
        items: Any = response
        for index, action in enumerate(actions):
            where = f"postReceive[{index}]"
            if not isinstance(action, dict):
                raise _invalid(f"{where} must be an object")
            action_type = action.get("type")
            properties = _optional_dict(action, "properties", where) or {}

            if action_type == "rootProperty":
                items = _lookup(items, self._string_property(properties, "property", where))
            elif action_type == "filter":
                items = [
                    item
                    for item in _as_list(items)
                    if self._passes(properties.get("pass"), {**scope, "responseItem": item}, where)
                ]
            elif action_type == "setKeyValue":
                items = [
                    render_template(properties, {**scope, "responseItem": item})
                    for item in _as_list(items)
                ]
            elif action_type == "sort":
                key = self._string_property(properties, "key", where) or "name"
                items = sorted(_as_list(items), key=lambda item: str(_lookup(item, key) or ""))
            elif action_type == "limit":
                items = _as_list(items)
                max_results = self._max_results(properties.get("maxResults"), where)
                if max_results is not None:
                    items = items[:max_results]
            else:
                raise _invalid(f"Unsupported postReceive action: {action_type}")

        return _as_list(items)

    @staticmethod
    def _string_property(properties: dict[str, Any], key: str, where: str) -> str | None:
        value = properties.get(key)
        if value is not None and not isinstance(value, str):
            raise _invalid(f"{where}.properties.{key} must be a string")
        return value

    @staticmethod
    def _passes(expression: Any, scope: dict[str, Any], where: str) -> bool:
        rendered = render_template(expression, scope)
        # 未识别的表达式会原样保留
        if isinstance(rendered, str) and "{{" in rendered:
            raise _invalid(f"Unsupported filter expression in {where}: {expression}")
        return bool(rendered)

    @staticmethod
    def _max_results(value: Any, where: str) -> int | None:
        if value is None:
            return None
        if isinstance(value, bool):
            raise _invalid(f"{where}.properties.maxResults must be a non-negative integer")
        try:
            max_results = int(value)
        except (TypeError, ValueError):
            raise _invalid(f"{where}.properties.maxResults must be a non-negative integer")
        if max_results < 0:
            raise _invalid(f"{where}.properties.maxResults must be a non-negative integer")
        return max_results


def _as_list(items: Any) -> list[Any]:
    if items is None:
        return []
    if isinstance(items, list):
        return items
    return [items]
