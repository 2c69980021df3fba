"""Dynamic Node Parameters 路由

编辑器在编辑期解析"动态"参数值的端点：
- GET /dynamic-node-parameters/options - 选项列表
- GET /dynamic-node-parameters/resource-locator-results - 资源定位器搜索结果
- GET /dynamic-node-parameters/resource-mapper-fields - 资源映射器字段

路由表在启动时显式构建：每条路由 = (方法, 路径, 查询 schema, 中间件列表, 处理函数)。
请求处理顺序：
1. 认证（依赖注入，失败 401）
2. 中间件（按顺序执行，如 assert_method_name）
3. 按 schema 解码并校验公共参数，得到 DynamicParameterRequest
4. 处理函数按需解码模式参数，调用用例
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Depends, Request

from src.application.use_cases.resolve_node_parameter_options import (
    ResolveOptionsInput,
    ResolveOptionsUseCase,
)
from src.application.use_cases.resolve_resource_locator_results import (
    ResolveResourceLocatorResultsInput,
    ResolveResourceLocatorResultsUseCase,
)
from src.application.use_cases.resolve_resource_mapper_fields import (
    ResolveResourceMapperFieldsInput,
    ResolveResourceMapperFieldsUseCase,
)
from src.config import settings
from src.domain.exceptions import InvalidParameterError, MissingParameterError
from src.domain.value_objects.dynamic_parameter_request import DynamicParameterRequest
from src.domain.value_objects.node_type_reference import NodeTypeReference
from src.interfaces.api.container import ApiContainer
from src.interfaces.api.dependencies.container import get_container
from src.interfaces.api.dependencies.current_user import get_current_user_id
from src.interfaces.api.query_decoder import (
    DecodedQuery,
    FieldKind,
    QueryField,
    QuerySchema,
    decode_query,
)

logger = logging.getLogger(__name__)

Middleware = Callable[[Mapping[str, str]], None]
Handler = Callable[
    [DecodedQuery, DynamicParameterRequest, str, ApiContainer], Awaitable[Any]
]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    schema: QuerySchema
    handler: Handler
    middlewares: tuple[Middleware, ...] = ()
    summary: str = ""


# ==================== 查询 schema ====================

BASE_SCHEMA: QuerySchema = (
    QueryField("nodeTypeAndVersion", FieldKind.JSON, required=True),
    QueryField("currentNodeParameters", FieldKind.JSON, required=True),
    QueryField("credentials", FieldKind.JSON),
    QueryField("path"),
    QueryField("methodName"),
)

OPTIONS_SCHEMA: QuerySchema = (
    *BASE_SCHEMA,
    QueryField("loadOptions", FieldKind.JSON, lazy=True),
)

RESOURCE_LOCATOR_SCHEMA: QuerySchema = (
    *BASE_SCHEMA,
    QueryField("filter"),
    QueryField("paginationToken"),
)

RESOURCE_MAPPER_SCHEMA: QuerySchema = BASE_SCHEMA


# ==================== 中间件与校验 ====================


def assert_method_name(query: Mapping[str, str]) -> None:
    """methodName 必需（在其他参数校验之前检查）"""
    if not query.get("methodName"):
        raise MissingParameterError("methodName")


def _to_parameter_request(decoded: DecodedQuery) -> DynamicParameterRequest:
    node_type = NodeTypeReference.from_dict(decoded.get("nodeTypeAndVersion"))

    current_node_parameters = decoded.get("currentNodeParameters")
    if not isinstance(current_node_parameters, dict):
        raise InvalidParameterError("currentNodeParameters", "expected a JSON object")

    credentials = decoded.get("credentials")
    if credentials is not None and not isinstance(credentials, dict):
        raise InvalidParameterError("credentials", "expected a JSON object")

    return DynamicParameterRequest(
        node_type=node_type,
        current_node_parameters=current_node_parameters,
        credentials=credentials,
        path=decoded.get("path"),
    )


def validate_request(
    query: Mapping[str, str], route: Route
) -> tuple[DecodedQuery, DynamicParameterRequest]:
    """运行路由中间件并解码公共参数

    异常：
        InvalidRequestError: 参数缺失、JSON 格式错误或结构不符
    """
    for middleware in route.middlewares:
        middleware(query)

    decoded = decode_query(query, route.schema)
    return decoded, _to_parameter_request(decoded)


# ==================== 处理函数 ====================


async def get_options(
    decoded: DecodedQuery,
    request: DynamicParameterRequest,
    user_id: str,
    container: ApiContainer,
) -> list[Any]:
    """返回通常需要从外部 API 加载或动态生成的参数选项"""
    method_name = decoded.get("methodName")

    # methodName 优先，提供了 methodName 时不解码 loadOptions
    load_options = None
    if not method_name:
        load_options = decoded.decode_json("loadOptions")
        if load_options is not None and not isinstance(load_options, dict):
            raise InvalidParameterError("loadOptions", "expected a JSON object")

    use_case = ResolveOptionsUseCase(
        context_builder=container.execution_context_builder,
        service=container.dynamic_node_parameters_service,
    )
    return await use_case.execute(
        ResolveOptionsInput(
            user_id=user_id,
            request=request,
            method_name=method_name,
            load_options=load_options,
        )
    )


async def get_resource_locator_results(
    decoded: DecodedQuery,
    request: DynamicParameterRequest,
    user_id: str,
    container: ApiContainer,
) -> Any:
    use_case = ResolveResourceLocatorResultsUseCase(
        context_builder=container.execution_context_builder,
        service=container.dynamic_node_parameters_service,
    )
    return await use_case.execute(
        ResolveResourceLocatorResultsInput(
            user_id=user_id,
            request=request,
            method_name=decoded.get("methodName"),
            filter=decoded.get("filter"),
            pagination_token=decoded.get("paginationToken"),
        )
    )


async def get_resource_mapping_fields(
    decoded: DecodedQuery,
    request: DynamicParameterRequest,
    user_id: str,
    container: ApiContainer,
) -> Any:
    use_case = ResolveResourceMapperFieldsUseCase(
        context_builder=container.execution_context_builder,
        service=container.dynamic_node_parameters_service,
    )
    return await use_case.execute(
        ResolveResourceMapperFieldsInput(
            user_id=user_id,
            request=request,
            method_name=decoded.get("methodName"),
        )
    )


# ==================== 路由表 ====================

DYNAMIC_NODE_PARAMETERS_ROUTES: tuple[Route, ...] = (
    Route(
        method="GET",
        path="/options",
        schema=OPTIONS_SCHEMA,
        handler=get_options,
        summary="Resolve parameter options",
    ),
    Route(
        method="GET",
        path="/resource-locator-results",
        schema=RESOURCE_LOCATOR_SCHEMA,
        handler=get_resource_locator_results,
        middlewares=(assert_method_name,),
        summary="Search resource locator results",
    ),
    Route(
        method="GET",
        path="/resource-mapper-fields",
        schema=RESOURCE_MAPPER_SCHEMA,
        handler=get_resource_mapping_fields,
        middlewares=(assert_method_name,),
        summary="Resolve resource mapper fields",
    ),
)


def _make_endpoint(route: Route) -> Callable[..., Awaitable[Any]]:
    async def endpoint(
        request: Request,
        user_id: str = Depends(get_current_user_id),
        container: ApiContainer = Depends(get_container),
    ):
        decoded, parameter_request = validate_request(request.query_params, route)
        logger.info(
            "Resolving %s for %s",
            route.path,
            parameter_request.node_type,
        )
        return await route.handler(decoded, parameter_request, user_id, container)

    endpoint.__name__ = route.handler.__name__
    return endpoint


def build_router(
    routes: tuple[Route, ...] = DYNAMIC_NODE_PARAMETERS_ROUTES,
    prefix: str = settings.dynamic_parameters_prefix,
) -> APIRouter:
    """根据路由表构建 APIRouter"""
    router = APIRouter(prefix=prefix, tags=["Dynamic Node Parameters"])
    for route in routes:
        router.add_api_route(
            route.path,
            _make_endpoint(route),
            methods=[route.method],
            summary=route.summary,
        )
    return router


router = build_router()
