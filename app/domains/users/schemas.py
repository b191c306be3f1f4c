"""Users 도메인 스키마 정의

요청 본문, 목록 필터, 응답 표현을 정의합니다. API 경계의 키는
camelCase(firstName, showDeleted 등)를 사용합니다.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.core.schemas import BaseSchema, RequestSchema
from app.core.utils.validators import parse_boolean
from app.domains.users.models import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH

DEFAULT_LIMIT = 25
MAX_LIMIT = 100


class UserSortField(str, Enum):
    """목록 정렬 기준 필드"""

    ID = "id"
    EMAIL = "email"
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    CREATED_AT = "createdAt"
    DELETED_AT = "deletedAt"


class SortOrder(str, Enum):
    """정렬 방향"""

    ASC = "ASC"
    DESC = "DESC"


class UserCreate(RequestSchema):
    """사용자 생성 요청 스키마"""

    email: str = Field(
        ..., max_length=EMAIL_MAX_LENGTH, description="이메일 (최대 254자)"
    )
    first_name: str = Field(
        ..., min_length=1, max_length=NAME_MAX_LENGTH, description="이름"
    )
    last_name: str = Field(
        ..., min_length=1, max_length=NAME_MAX_LENGTH, description="성"
    )

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """형식만 검증하고 입력 문자열은 그대로 유지 (정규화하지 않음)"""
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"email must be an email: {e}") from e
        return v


class UserUpdate(RequestSchema):
    """사용자 수정 요청 스키마

    필드를 생략하거나 null로 보내면 기존 값을 유지합니다.
    빈 문자열은 유효하지 않은 값으로 거부됩니다.
    """

    first_name: Optional[str] = Field(
        None, min_length=1, max_length=NAME_MAX_LENGTH, description="이름"
    )
    last_name: Optional[str] = Field(
        None, min_length=1, max_length=NAME_MAX_LENGTH, description="성"
    )

    def changes(self) -> dict[str, Any]:
        """실제로 값이 전달된 필드만 반환 (컬럼명 기준)"""
        return self.model_dump(exclude_none=True)


class UserFilter(BaseSchema):
    """사용자 목록 조회 필터 (불변 값 객체)"""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    limit: int = Field(
        DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="최대 조회 건수"
    )
    offset: int = Field(0, ge=0, description="건너뛸 건수")
    sort: UserSortField = Field(UserSortField.ID, description="정렬 기준")
    order: SortOrder = Field(SortOrder.ASC, description="정렬 방향")
    show_deleted: bool = Field(False, description="삭제된 사용자 포함 여부")

    @field_validator("show_deleted", mode="before")
    @classmethod
    def parse_show_deleted(cls, v: Any) -> bool:
        try:
            return parse_boolean(v, "showDeleted")
        except ValueError as e:
            raise PydanticCustomError("bool_parsing", str(e)) from e


class UserResponse(BaseSchema):
    """사용자 응답 스키마 (저장된 엔티티와 1:1)"""

    id: int
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    deleted_at: Optional[datetime] = None
