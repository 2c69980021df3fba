"""JWT Token服务

职责：
1. 解码并验证请求携带的访问令牌，取出调用者用户 ID（sub）
2. 签发访问令牌（供测试和运维脚本使用，登录流程不在本服务范围内）

密钥与算法来自配置（settings.secret_key / settings.algorithm）。
"""

from datetime import datetime, timedelta, timezone

import jwt

from src.config import settings


class JWTService:
    """JWT Token服务（无状态，全部为静态方法）"""

    @staticmethod
    def create_access_token(user_id: str, expires_delta: timedelta | None = None, **claims) -> str:
        """签发访问令牌

        Args:
            user_id: 用户 ID，写入 sub 声明
            expires_delta: 有效期，不指定则使用 settings.access_token_expire_minutes
            **claims: 其他附加声明

        Returns:
            str: 编码后的 JWT
        """
        now = datetime.now(timezone.utc)
        expire = now + (
            expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
        )
        payload = {**claims, "sub": user_id, "iat": now, "exp": expire}
        return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)

    @staticmethod
    def decode_token(token: str) -> dict:
        """解码并验证令牌

        Raises:
            ValueError: 令牌过期、签名无效或格式错误
        """
        try:
            return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token已过期")
        except jwt.PyJWTError:
            raise ValueError("Token无效")

    @staticmethod
    def get_user_id(token: str) -> str:
        """从令牌中取出用户 ID

        Raises:
            ValueError: 令牌无效或缺少 sub 声明
        """
        payload = JWTService.decode_token(token)
        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise ValueError("Token缺少用户标识")
        return user_id
