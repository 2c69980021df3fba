"""DI helpers."""

from .container import get_container  # noqa: F401
from .current_user import get_current_user_id  # noqa: F401
