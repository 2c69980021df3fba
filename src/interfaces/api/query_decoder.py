"""查询参数解码器

每个端点用一个声明式 schema 描述自己的查询参数：

    schema = (
        QueryField("nodeTypeAndVersion", FieldKind.JSON, required=True),
        QueryField("path"),
        QueryField("loadOptions", FieldKind.JSON, lazy=True),
    )

decode_query() 执行顺序：
1. 按声明顺序检查所有必需参数是否存在（空字符串视为缺失）
2. 解码所有非延迟参数（JSON 参数解析失败抛出 ParameterParseError）

延迟参数（lazy=True）保留原始字符串，只有在真正需要时才通过
DecodedQuery.decode_json() 解码。
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from src.domain.exceptions import MissingParameterError, ParameterParseError


class FieldKind(str, Enum):
    STRING = "string"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class QueryField:
    """查询参数声明

    属性说明：
    - name: 查询参数名
    - kind: STRING 原样透传，JSON 解析为结构
    - required: 是否必需
    - lazy: 是否延迟解码（只对 JSON 参数有意义）
    """

    name: str
    kind: FieldKind = FieldKind.STRING
    required: bool = False
    lazy: bool = False


QuerySchema = tuple[QueryField, ...]


def parse_json_field(name: str, raw: str) -> Any:
    """解析单个 JSON 查询参数

    异常：
        ParameterParseError: 不是合法 JSON
    """
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ParameterParseError(name) from exc


@dataclass(frozen=True)
class DecodedQuery:
    """解码后的查询参数（不可变）

    未提供的可选参数取值为 None，与空字符串、空结构区分。
    """

    values: Mapping[str, Any]
    raw: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        return self.values.get(name)

    def decode_json(self, name: str) -> Any:
        """按需解码延迟 JSON 参数，未提供时返回 None"""
        raw = self.raw.get(name)
        if not raw:
            return None
        return parse_json_field(name, raw)


def decode_query(query: Mapping[str, str], schema: QuerySchema) -> DecodedQuery:
    """按 schema 解码查询参数

    异常：
        MissingParameterError: 必需参数缺失（按声明顺序报告第一个）
        ParameterParseError: JSON 参数格式错误
    """
    for query_field in schema:
        if query_field.required and not query.get(query_field.name):
            raise MissingParameterError(query_field.name)

    values: dict[str, Any] = {}
    lazy_raw: dict[str, str] = {}
    for query_field in schema:
        raw = query.get(query_field.name)
        if query_field.lazy:
            if raw is not None:
                lazy_raw[query_field.name] = raw
            continue

        if query_field.kind is FieldKind.JSON:
            values[query_field.name] = parse_json_field(query_field.name, raw) if raw else None
        else:
            values[query_field.name] = raw

    return DecodedQuery(values=MappingProxyType(values), raw=MappingProxyType(lazy_raw))
