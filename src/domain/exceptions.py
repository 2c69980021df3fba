"""领域层异常定义

异常分层：
1. InvalidRequestError：请求参数缺失/格式错误（客户端错误，400）
2. ContextBuildError：执行上下文构建失败（服务端错误，500，不暴露细节）
3. ParameterResolutionError：参数解析服务抛出的错误，状态码由抛出方决定

API 层统一捕获这些异常并转换为 JSON 错误响应。
"""


class DomainError(Exception):
    """领域层异常基类"""

    pass


class InvalidRequestError(DomainError):
    """请求参数无效（客户端错误）

    参数：
        field: 出错的查询参数名
        message: 可读的错误信息
    """

    status_code = 400

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class MissingParameterError(InvalidRequestError):
    """必需的查询参数缺失

    示例：
        raise MissingParameterError("methodName")
        # -> "Parameter methodName is required."
    """

    def __init__(self, field: str):
        super().__init__(field, f"Parameter {field} is required.")


class InvalidParameterError(InvalidRequestError):
    """查询参数可以解码，但结构不符合预期"""

    def __init__(self, field: str, reason: str):
        self.reason = reason
        super().__init__(field, f"Parameter {field} is invalid: {reason}")


class ParameterParseError(InvalidParameterError):
    """查询参数不是合法的 JSON"""

    def __init__(self, field: str):
        super().__init__(field, "not valid JSON")


class ContextBuildError(DomainError):
    """执行上下文构建失败

    调用方只会看到通用错误信息，具体原因仅写入日志。
    """

    status_code = 500

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to build execution context: {reason}")


class ParameterResolutionError(DomainError):
    """参数解析失败

    由解析服务（外部协作方）抛出，status_code 与 message 均由抛出方决定，
    API 层原样返回，不做包装或重新分类。

    示例：
        raise ParameterResolutionError("upstream unreachable", status_code=500)
    """

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NodeTypeNotFoundError(ParameterResolutionError):
    """节点类型（名称 + 版本）未注册"""

    def __init__(self, name: str, version: float):
        self.name = name
        self.version = version
        super().__init__(f"Unknown node type: {name} (version {version})", status_code=400)


class NodeMethodNotFoundError(ParameterResolutionError):
    """节点类型未声明对应的动态参数方法"""

    def __init__(self, node_type: str, method_kind: str, method_name: str):
        self.node_type = node_type
        self.method_kind = method_kind
        self.method_name = method_name
        super().__init__(
            f'Node type "{node_type}" does not have a method "{method_name}" in {method_kind}',
            status_code=400,
        )
