"""NodeTypeReference - 节点类型引用

业务定义：
- 标识需要调用哪个节点类型的动态参数逻辑（名称 + 版本）
- 由查询参数 nodeTypeAndVersion 解码得到，解码后不可变

示例：
    ref = NodeTypeReference.from_dict({"name": "n8n-nodes-base.httpRequest", "version": 1})
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.domain.exceptions import InvalidParameterError

_FIELD = "nodeTypeAndVersion"


@dataclass(frozen=True, slots=True)
class NodeTypeReference:
    """节点类型引用（值对象）

    属性说明：
    - name: 节点类型名称（如 "n8n-nodes-base.httpRequest"）
    - version: 节点类型版本（整数或小数，如 1、2.1）
    """

    name: str
    version: float

    @classmethod
    def from_dict(cls, data: Any) -> NodeTypeReference:
        """从解码后的 JSON 构造

        异常：
            InvalidParameterError: 结构不是 {name: str, version: number}
        """
        if not isinstance(data, dict):
            raise InvalidParameterError(_FIELD, "expected an object with name and version")

        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidParameterError(_FIELD, "name must be a non-empty string")

        version = data.get("version")
        # bool 是 int 的子类，需要单独排除
        if isinstance(version, bool) or not isinstance(version, (int, float)):
            raise InvalidParameterError(_FIELD, "version must be a number")

        return cls(name=name, version=version)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version}

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"
