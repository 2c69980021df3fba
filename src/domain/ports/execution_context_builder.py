"""ExecutionContextBuilder Port（执行上下文构建端口）

根据调用者身份和当前节点参数构建 ExecutionContext。
异步、可能失败；失败时应抛出 ContextBuildError（服务端错误，不在本地恢复）。
"""

from typing import Any, Protocol

from src.domain.value_objects.execution_context import ExecutionContext


class ExecutionContextBuilder(Protocol):
    """执行上下文构建器接口"""

    async def build(
        self, user_id: str, current_node_parameters: dict[str, Any]
    ) -> ExecutionContext:
        """构建执行上下文

        参数：
            user_id: 已认证的调用者用户 ID
            current_node_parameters: 当前节点参数快照

        异常：
            ContextBuildError: 无法为该用户构建上下文
        """
        ...
