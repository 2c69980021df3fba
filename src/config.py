"""应用配置模块 - 使用 Pydantic Settings 管理环境变量"""

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Dynamic Node Parameters", description="应用名称")
    app_version: str = Field(default="0.1.0", description="应用版本")
    env: Literal["development", "production", "test"] = Field(
        default="development", description="运行环境"
    )
    debug: bool = Field(default=False, description="调试模式")

    # Server
    host: str = Field(default="0.0.0.0", description="服务器地址")
    port: int = Field(default=5678, description="服务器端口")
    reload: bool = Field(default=False, description="热重载")
    api_prefix: str = Field(default="/api", description="API 路由前缀")
    dynamic_parameters_prefix: str = Field(
        default="/dynamic-node-parameters", description="动态参数路由前缀"
    )

    # Security
    secret_key: str = Field(
        default="your-secret-key-change-this-in-production",
        description="JWT 密钥",
    )
    algorithm: str = Field(default="HS256", description="JWT 算法")
    access_token_expire_minutes: int = Field(default=30, description="访问令牌过期时间（分钟）")

    # CORS
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:5678",
            "http://localhost:8080",
            "http://127.0.0.1:5678",
            "http://127.0.0.1:8080",
        ],
        description="允许的跨域源",
    )

    # Execution context（构建节点方法所需的运行时上下文）
    instance_base_url: str = Field(default="http://localhost:5678", description="实例基础 URL")
    rest_endpoint: str = Field(default="rest", description="REST API 路径")
    webhook_endpoint: str = Field(default="webhook", description="Webhook 路径")
    webhook_waiting_endpoint: str = Field(default="webhook-waiting", description="等待中 Webhook 路径")
    webhook_test_endpoint: str = Field(default="webhook-test", description="测试 Webhook 路径")
    form_waiting_endpoint: str = Field(default="form-waiting", description="等待中表单路径")
    generic_timezone: str = Field(default="America/New_York", description="默认时区")
    execution_timeout: int = Field(default=-1, description="执行超时时间（秒），-1 表示不限制")
    variables: dict[str, Any] = Field(default_factory=dict, description="暴露给节点方法的变量")

    # Node types
    node_types_dir: str = Field(
        default="definitions/node_types", description="声明式节点类型定义目录"
    )

    # Timeout
    request_timeout: int = Field(default=30, description="外部请求超时时间（秒）")

    # Logging
    log_level: str = Field(default="INFO", description="日志级别")
    log_format: Literal["json", "text"] = Field(default="text", description="日志格式")


# 全局配置实例
settings = Settings()
