"""从 app.state 取出 ApiContainer 的依赖。

容器缺失时按上下文构建失败处理（500），不暴露内部细节。
"""

from __future__ import annotations

from fastapi import Request

from src.domain.exceptions import ContextBuildError
from src.interfaces.api.container import ApiContainer


def get_container(request: Request) -> ApiContainer:
    container: ApiContainer | None = getattr(request.app.state, "container", None)
    if container is None:
        raise ContextBuildError("api container is not initialized")
    return container
