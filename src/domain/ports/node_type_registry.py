"""NodeTypeRegistry（节点类型注册表）

管理所有可解析动态参数的节点类型。
同名节点类型可以按版本注册多个定义。
"""

from src.domain.entities.node_type_definition import NodeTypeDefinition
from src.domain.exceptions import NodeTypeNotFoundError
from src.domain.value_objects.node_type_reference import NodeTypeReference


class NodeTypeRegistry:
    """节点类型注册表"""

    def __init__(self):
        self._node_types: dict[str, list[NodeTypeDefinition]] = {}

    def register(self, definition: NodeTypeDefinition) -> None:
        """注册节点类型定义

        参数：
            definition: 节点类型定义
        """
        self._node_types.setdefault(definition.name, []).append(definition)

    def get(self, name: str, version: float) -> NodeTypeDefinition | None:
        """获取节点类型定义

        返回：
            支持该版本的定义，未注册则返回 None
        """
        for definition in self._node_types.get(name, []):
            if definition.supports(version):
                return definition
        return None

    def has(self, name: str, version: float) -> bool:
        return self.get(name, version) is not None

    def get_by_reference(self, reference: NodeTypeReference) -> NodeTypeDefinition:
        """按引用获取节点类型定义

        异常：
            NodeTypeNotFoundError: 名称或版本未注册
        """
        definition = self.get(reference.name, reference.version)
        if definition is None:
            raise NodeTypeNotFoundError(reference.name, reference.version)
        return definition

    def __len__(self) -> int:
        return sum(len(definitions) for definitions in self._node_types.values())
