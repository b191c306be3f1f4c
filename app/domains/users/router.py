"""Users 도메인 라우터

사용자 CRUD API 엔드포인트입니다. 성공 응답은 사용자 표현을 그대로
반환하고, 실패 응답은 공통 에러 형식을 사용합니다.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.schemas import ErrorResponse
from app.domains.users.policy import UserPolicy
from app.domains.users.schemas import (
    UserCreate,
    UserFilter,
    UserResponse,
    UserUpdate,
)
from app.domains.users.service import UserService

router = APIRouter()

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "요청 값 검증 실패"},
}
NOT_FOUND_RESPONSES: dict[int | str, dict[str, Any]] = {
    **ERROR_RESPONSES,
    404: {"model": ErrorResponse, "description": "사용자 없음 또는 삭제됨"},
}


def get_user_service(session: AsyncSession = Depends(get_db)) -> UserService:
    """UserService 의존성"""
    return UserService(session)


def get_user_policy(
    service: UserService = Depends(get_user_service),
) -> UserPolicy:
    """UserPolicy 의존성"""
    return UserPolicy(service)


def get_user_filter(
    limit: Optional[str] = Query(
        None, description="최대 조회 건수 (1~100, 기본 25)"
    ),
    offset: Optional[str] = Query(None, description="건너뛸 건수 (기본 0)"),
    sort: Optional[str] = Query(
        None,
        description=(
            "정렬 기준 (id, email, firstName, lastName, createdAt, "
            "deletedAt, 기본 id)"
        ),
    ),
    order: Optional[str] = Query(
        None, description="정렬 방향 (ASC, DESC, 기본 ASC)"
    ),
    show_deleted: Optional[str] = Query(
        None,
        alias="showDeleted",
        description="삭제된 사용자 포함 여부 (true/false, 기본 false)",
    ),
) -> UserFilter:
    """쿼리 문자열을 UserFilter로 검증

    검증 실패는 RequestValidationError로 변환되어 400으로 응답됩니다.
    """
    raw = {
        "limit": limit,
        "offset": offset,
        "sort": sort,
        "order": order,
        "showDeleted": show_deleted,
    }
    try:
        return UserFilter.model_validate(
            {key: value for key, value in raw.items() if value is not None}
        )
    except ValidationError as e:
        errors = [
            {**error, "loc": ("query", *error["loc"])} for error in e.errors()
        ]
        raise RequestValidationError(errors) from e


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    responses={
        **ERROR_RESPONSES,
        409: {"model": ErrorResponse, "description": "이메일 중복"},
    },
)
async def create_user(
    user_data: UserCreate,
    policy: UserPolicy = Depends(get_user_policy),
):
    """사용자 생성"""
    return await policy.create_user(user_data)


@router.get(
    "",
    response_model=list[UserResponse],
    responses=ERROR_RESPONSES,
)
async def get_users(
    user_filter: UserFilter = Depends(get_user_filter),
    policy: UserPolicy = Depends(get_user_policy),
):
    """사용자 목록 조회"""
    return await policy.list_users(user_filter)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses=NOT_FOUND_RESPONSES,
)
async def get_user(
    user_id: int,
    policy: UserPolicy = Depends(get_user_policy),
):
    """사용자 상세 조회 (삭제된 사용자 포함)"""
    return await policy.get_user(user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses=NOT_FOUND_RESPONSES,
)
async def update_user(
    user_id: int,
    user_data: Optional[UserUpdate] = None,
    policy: UserPolicy = Depends(get_user_policy),
):
    """사용자 수정 (전달된 필드만 변경, 본문이 없으면 변경 없음)"""
    return await policy.update_user(user_id, user_data or UserUpdate())


@router.delete(
    "/{user_id}",
    response_model=UserResponse,
    responses=NOT_FOUND_RESPONSES,
)
async def delete_user(
    user_id: int,
    policy: UserPolicy = Depends(get_user_policy),
):
    """사용자 삭제 (Soft Delete)"""
    return await policy.delete_user(user_id)
