"""Users 도메인 서비스

리포지토리 호출과 저장 모델 → 응답 표현 매핑을 담당합니다.
존재 여부, 삭제 상태, 이메일 중복 같은 리소스 규칙은 검사하지 않으며
UserPolicy가 이를 담당합니다.
"""

from typing import Any, Optional

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.middlewares.context import get_request_id
from app.domains.users.models import ID_MAX, User
from app.domains.users.repository import UserRepository
from app.domains.users.schemas import (
    SortOrder,
    UserCreate,
    UserFilter,
    UserResponse,
    UserSortField,
    UserUpdate,
)

logger = get_logger(__name__)

SORT_COLUMNS = {
    UserSortField.ID: User.id,
    UserSortField.EMAIL: User.email,
    UserSortField.FIRST_NAME: User.first_name,
    UserSortField.LAST_NAME: User.last_name,
    UserSortField.CREATED_AT: User.created_at,
    UserSortField.DELETED_AT: User.deleted_at,
}


def build_order_by(
    field: UserSortField, order: SortOrder
) -> ColumnElement[Any]:
    """정렬 필드/방향을 단일 ORDER BY 절로 변환"""
    column = SORT_COLUMNS[field]
    return column.desc() if order == SortOrder.DESC else column.asc()


def to_response(user: Optional[User]) -> Optional[UserResponse]:
    """저장 모델을 응답 표현으로 변환 (None → None)"""
    if user is None:
        return None
    return UserResponse.model_validate(user)


class UserService:
    """사용자 서비스"""

    def __init__(self, session: AsyncSession):
        self.repository = UserRepository(session)

    async def create(self, user_data: UserCreate) -> UserResponse:
        """사용자 생성

        Args:
            user_data: 생성 요청 데이터

        Returns:
            생성된 사용자 표현
        """
        user = User(
            email=user_data.email,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
        )
        created_user = await self.repository.create(user)

        logger.info(
            "User created",
            extra={
                "request_id": get_request_id(),
                "user_id": created_user.id,
                "action": "created",
            },
        )
        return UserResponse.model_validate(created_user)

    async def find_all(self, user_filter: UserFilter) -> list[UserResponse]:
        """사용자 목록 조회

        Args:
            user_filter: 페이지네이션/정렬/삭제 포함 여부 필터

        Returns:
            사용자 표현 목록 (DB 정렬 순서 유지)
        """
        users = await self.repository.get_list(
            offset=user_filter.offset,
            limit=user_filter.limit,
            order_by=build_order_by(user_filter.sort, user_filter.order),
            include_deleted=user_filter.show_deleted,
        )
        return [UserResponse.model_validate(user) for user in users]

    async def find_by_id(self, user_id: int) -> Optional[UserResponse]:
        """ID로 사용자 조회 (삭제된 사용자 포함)

        컬럼 범위(1..ID_MAX)를 벗어난 ID는 조회 없이 None을 반환합니다.
        """
        if not 0 < user_id <= ID_MAX:
            return None
        user = await self.repository.get_by_id(user_id, include_deleted=True)
        return to_response(user)

    async def find_by_email(self, email: str) -> Optional[UserResponse]:
        """이메일로 사용자 조회 (삭제된 사용자 포함)"""
        user = await self.repository.get_by_email(email, include_deleted=True)
        return to_response(user)

    async def update(
        self, user_id: int, user_data: UserUpdate
    ) -> Optional[UserResponse]:
        """사용자 부분 수정

        전달된 필드만 덮어쓰고, 수정 후 다시 조회한 결과를 반환합니다.

        Args:
            user_id: 사용자 ID
            user_data: 수정 요청 데이터

        Returns:
            수정된 사용자 표현
        """
        changes = user_data.changes()
        await self.repository.update(user_id, changes)

        logger.info(
            "User updated",
            extra={
                "request_id": get_request_id(),
                "user_id": user_id,
                "action": "updated",
                "fields": sorted(changes),
            },
        )
        return await self.find_by_id(user_id)

    async def remove(self, user_id: int) -> Optional[UserResponse]:
        """사용자 Soft Delete

        Args:
            user_id: 삭제할 사용자 ID

        Returns:
            deleted_at이 채워진 사용자 표현
        """
        await self.repository.soft_delete(user_id)

        logger.info(
            "User deleted",
            extra={
                "request_id": get_request_id(),
                "user_id": user_id,
                "action": "deleted",
            },
        )
        return await self.find_by_id(user_id)
