"""DynamicParameterRequest - 已解码的动态参数请求

三个端点共享的部分：节点类型、当前参数快照、可选凭证引用、目标字段路径。
由 API 层的查询解码器构造后显式向下传递，不挂在 Request 对象上。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.domain.value_objects.node_type_reference import NodeTypeReference


@dataclass(frozen=True, slots=True)
class DynamicParameterRequest:
    """动态参数请求（值对象）

    属性说明：
    - node_type: 节点类型引用
    - current_node_parameters: 编辑器中节点的当前参数（不解析内部结构）
    - credentials: 凭证引用 {凭证类型: {id, name}}，原样透传，可能为 None
    - path: 目标字段在参数树中的路径（如 "parameters.url"）
    """

    node_type: NodeTypeReference
    current_node_parameters: dict[str, Any]
    credentials: dict[str, Any] | None = None
    path: str | None = None
