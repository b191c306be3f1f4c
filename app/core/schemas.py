"""공통 API 스키마

리소스 응답은 표현(representation) 자체를 그대로 반환하고,
에러 응답과 헬스 체크 등 부가 엔드포인트만 공통 래퍼를 사용합니다.

Usage::

    from app.core.schemas import APIResponse, create_response
    return create_response(data={"status": "healthy"}, message="OK")
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """기본 스키마 (ORM 모델 변환용, camelCase 직렬화)"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class RequestSchema(BaseModel):
    """요청 본문 스키마

    camelCase 키만 받으며, 정의되지 않은 필드가 있으면 검증에 실패한다.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="forbid",
    )


class APIResponse(BaseModel, Generic[DataT]):
    """단일 데이터 API 응답"""

    success: bool = True
    message: str = "요청이 성공적으로 처리되었습니다."
    data: Optional[DataT] = None


def create_response(
    data: Optional[DataT] = None,
    message: str = "요청이 성공적으로 처리되었습니다.",
    success: bool = True,
) -> APIResponse[DataT]:
    """API 응답 생성 팩토리 함수

    Args:
        data: 응답 데이터
        message: 응답 메시지
        success: 성공 여부

    Returns:
        APIResponse 인스턴스
    """
    return APIResponse(success=success, message=message, data=data)


class ErrorDetail(BaseModel):
    """에러 상세 정보"""

    code: str = Field(..., description="에러 코드")
    message: str = Field(..., description="에러 메시지")
    detail: Optional[dict[str, Any]] = Field(default=None, description="추가 정보")


class ErrorResponse(BaseModel):
    """에러 API 응답

    Example::

        {
            "success": false,
            "message": "사용자를 찾을 수 없습니다.",
            "error": {
                "code": "USER_NOT_FOUND",
                "message": "사용자를 찾을 수 없습니다.",
                "detail": {"user_id": 123}
            }
        }
    """

    success: bool = False
    message: str
    error: ErrorDetail
