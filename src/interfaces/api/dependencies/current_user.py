"""获取当前调用者的依赖注入

职责：
1. 从 Authorization 头中提取 Bearer token
2. 验证 token 并取出用户 ID（sub）
3. 失败时返回 401，不区分具体原因

动态参数端点全部要求登录，认证在任何查询参数校验之前完成。
"""

from fastapi import Header, HTTPException, status

from src.infrastructure.auth.jwt_service import JWTService


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    authorization: str | None = Header(None, description="Bearer token"),
) -> str:
    """获取当前调用者用户 ID（必需）

    Returns:
        str: 用户 ID

    Raises:
        HTTPException 401: 未提供 token、格式错误、过期或无效
    """
    if not authorization:
        raise _unauthorized("Unauthorized")

    try:
        scheme, token = authorization.split()
    except ValueError:
        raise _unauthorized("Invalid authorization header")

    if scheme.lower() != "bearer":
        raise _unauthorized("Invalid authorization header")

    try:
        return JWTService.get_user_id(token)
    except ValueError:
        raise _unauthorized("Unauthorized")
