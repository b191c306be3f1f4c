"""요청/응답 로깅 미들웨어"""

from typing import Callable, cast

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import get_logger
from app.core.middlewares.context import set_request_id
from app.core.utils.time import measure_time

logger = get_logger(__name__)

# 로깅 제외 경로
EXCLUDE_PATHS = {"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}

REQUEST_ID_HEADER = "X-Request-ID"


def _describe(request: Request) -> str:
    """로그용 요청 요약 (메서드 + 경로 + 쿼리)"""
    query = request.url.query
    path = f"{request.url.path}?{query}" if query else request.url.path
    return f"{request.method} {path}"


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청/응답 로깅 및 처리 시간 측정 미들웨어"""

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        if request.url.path in EXCLUDE_PATHS:
            return cast(Response, await call_next(request))

        # 헤더의 요청 ID를 재사용하거나 새로 생성
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        extra = {"request_id": request_id}
        description = _describe(request)

        logger.info(
            f"→ {description} "
            f"| Client: {request.client.host if request.client else 'unknown'}",
            extra=extra,
        )

        with measure_time() as timer:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"✗ {description} | Error: {e} "
                    f"| Time: {timer['elapsed_ms']:.2f}ms",
                    extra=extra,
                )
                raise

        process_time = timer["elapsed_ms"]

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.2f}ms"

        if response.status_code < 400:
            logger.info(
                f"✓ {description} | Status: {response.status_code} "
                f"| Time: {process_time:.2f}ms",
                extra=extra,
            )
        else:
            logger.warning(
                f"✗ {description} | Status: {response.status_code} "
                f"| Time: {process_time:.2f}ms",
                extra=extra,
            )

        return cast(Response, response)
