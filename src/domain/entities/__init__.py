"""Domain 实体

导出所有领域实体，方便其他模块导入
"""

from src.domain.entities.node_type_definition import (
    NodeMethodContext,
    NodeMethodKind,
    NodeTypeDefinition,
)

__all__ = ["NodeMethodContext", "NodeMethodKind", "NodeTypeDefinition"]
