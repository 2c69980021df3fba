"""SettingsExecutionContextBuilder - 基于配置的执行上下文构建器

ExecutionContextBuilder Port 的默认实现：
- 实例地址、时区、超时、变量全部来自配置
- 调用者身份来自认证层给出的 user_id

无法识别调用者（user_id 为空）时抛出 ContextBuildError。
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from src.config import Settings
from src.domain.exceptions import ContextBuildError
from src.domain.value_objects.execution_context import ExecutionContext


def _join_url(base_url: str, endpoint: str) -> str:
    return f"{base_url.rstrip('/')}/{endpoint.strip('/')}/"


class SettingsExecutionContextBuilder:
    """基于配置的执行上下文构建器"""

    def __init__(
        self,
        *,
        instance_base_url: str,
        rest_endpoint: str = "rest",
        webhook_endpoint: str = "webhook",
        webhook_waiting_endpoint: str = "webhook-waiting",
        webhook_test_endpoint: str = "webhook-test",
        form_waiting_endpoint: str = "form-waiting",
        timezone: str = "America/New_York",
        execution_timeout: int = -1,
        variables: dict[str, Any] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._instance_base_url = instance_base_url
        self._rest_endpoint = rest_endpoint
        self._webhook_endpoint = webhook_endpoint
        self._webhook_waiting_endpoint = webhook_waiting_endpoint
        self._webhook_test_endpoint = webhook_test_endpoint
        self._form_waiting_endpoint = form_waiting_endpoint
        self._timezone = timezone
        self._execution_timeout = execution_timeout
        self._variables = dict(variables or {})
        self._clock = clock

    @classmethod
    def from_settings(cls, app_settings: Settings) -> SettingsExecutionContextBuilder:
        return cls(
            instance_base_url=app_settings.instance_base_url,
            rest_endpoint=app_settings.rest_endpoint,
            webhook_endpoint=app_settings.webhook_endpoint,
            webhook_waiting_endpoint=app_settings.webhook_waiting_endpoint,
            webhook_test_endpoint=app_settings.webhook_test_endpoint,
            form_waiting_endpoint=app_settings.form_waiting_endpoint,
            timezone=app_settings.generic_timezone,
            execution_timeout=app_settings.execution_timeout,
            variables=app_settings.variables,
        )

    async def build(
        self, user_id: str, current_node_parameters: dict[str, Any]
    ) -> ExecutionContext:
        """构建执行上下文

        异常：
            ContextBuildError: user_id 为空
        """
        if not user_id:
            raise ContextBuildError("caller identity is missing")

        timeout_timestamp = None
        if self._execution_timeout > 0:
            timeout_timestamp = int((self._clock() + self._execution_timeout) * 1000)

        base_url = self._instance_base_url
        return ExecutionContext(
            user_id=user_id,
            instance_base_url=base_url,
            rest_api_url=_join_url(base_url, self._rest_endpoint),
            webhook_base_url=_join_url(base_url, self._webhook_endpoint),
            webhook_waiting_base_url=_join_url(base_url, self._webhook_waiting_endpoint),
            webhook_test_base_url=_join_url(base_url, self._webhook_test_endpoint),
            form_waiting_base_url=_join_url(base_url, self._form_waiting_endpoint),
            timezone=self._timezone,
            current_node_parameters=current_node_parameters,
            execution_timeout_timestamp=timeout_timestamp,
            variables=dict(self._variables),
        )
