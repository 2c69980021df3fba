"""ExecutionContext - 节点方法执行上下文

职责：
1. 携带调用者身份（user_id）
2. 携带实例级地址（REST/Webhook/表单等基础 URL）
3. 携带当前节点参数快照、时区、超时时间戳、变量

设计原则：
- 值对象：不可变（frozen dataclass）
- 由 ExecutionContextBuilder 构造，API 层和用例层只负责传递，不解析其内容

示例：
    context = await builder.build("user-1", {"resource": "issue"})
    context.user_id  # "user-1"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ExecutionContext:
    """执行上下文（"additional data"）

    属性说明：
    - user_id: 调用者用户 ID
    - instance_base_url: 实例基础 URL
    - rest_api_url: REST API 地址
    - webhook_base_url / webhook_waiting_base_url / webhook_test_base_url: Webhook 地址
    - form_waiting_base_url: 等待中表单地址
    - timezone: 默认时区
    - current_node_parameters: 当前节点参数快照
    - execution_timeout_timestamp: 执行超时时间戳（毫秒），None 表示不限制
    - variables: 暴露给节点方法的变量
    """

    user_id: str
    instance_base_url: str
    rest_api_url: str
    webhook_base_url: str
    webhook_waiting_base_url: str
    webhook_test_base_url: str
    form_waiting_base_url: str
    timezone: str
    current_node_parameters: dict[str, Any] = field(default_factory=dict)
    execution_timeout_timestamp: int | None = None
    variables: dict[str, Any] = field(default_factory=dict)
