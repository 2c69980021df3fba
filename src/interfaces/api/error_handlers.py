"""统一异常处理

把领域异常转换为 JSON 错误响应 {"detail": "..."}：
- InvalidRequestError -> 400，消息指明出错的参数
- ContextBuildError -> 500，通用消息（原因只写日志）
- ParameterResolutionError -> 抛出方声明的状态码与消息，原样返回
- 其他未分类异常 -> 500 "Internal server error"，不暴露堆栈
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import (
    ContextBuildError,
    InvalidRequestError,
    ParameterResolutionError,
)

logger = logging.getLogger(__name__)


async def invalid_request_handler(request: Request, exc: InvalidRequestError) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def context_build_error_handler(request: Request, exc: ContextBuildError) -> JSONResponse:
    logger.error("Execution context build failed for %s: %s", request.url.path, exc.reason)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": "Failed to build execution context"},
    )


async def parameter_resolution_error_handler(
    request: Request, exc: ParameterResolutionError
) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("Parameter resolution failed for %s: %s", request.url.path, exc.message)
    else:
        logger.info("Parameter resolution rejected for %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Request to %s failed due to unexpected error", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.add_exception_handler(ContextBuildError, context_build_error_handler)
    app.add_exception_handler(ParameterResolutionError, parameter_resolution_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
