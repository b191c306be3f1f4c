"""미들웨어 모듈"""

from app.core.middlewares.context import (
    generate_request_id,
    get_request_id,
    set_request_id,
)
from app.core.middlewares.logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
]
