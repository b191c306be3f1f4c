"""요청 ID 컨텍스트 관리

요청마다 하나의 ID를 ``contextvars``에 보관하여 서비스 계층 로그와
응답 헤더(``X-Request-ID``)를 연결한다.
"""

import contextvars
import uuid
from typing import Optional

request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def get_request_id() -> Optional[str]:
    """현재 요청 ID 반환 (요청 컨텍스트 밖이면 None)"""
    return request_id_ctx.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """요청 ID 설정 (비어 있으면 새로 생성)"""
    if not request_id:
        request_id = generate_request_id()
    request_id_ctx.set(request_id)
    return request_id


def generate_request_id() -> str:
    """새 요청 ID 생성"""
    return str(uuid.uuid4())
