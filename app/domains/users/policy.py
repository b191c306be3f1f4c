"""Users 도메인 정책

리소스 상태(없음/활성/삭제됨)에 따른 비즈니스 규칙을 적용한 뒤
UserService에 위임합니다.

- 생성: 이메일이 삭제된 사용자를 포함해 이미 존재하면 409
- 단건 조회: 없으면 404 (삭제된 사용자는 정상 반환)
- 수정/삭제: 없거나 이미 삭제된 경우 모두 404
"""

from app.core.logging import get_logger
from app.core.middlewares.context import get_request_id
from app.domains.users.exceptions import (
    UserAlreadyDeletedException,
    UserEmailAlreadyExistsException,
    UserNotFoundException,
)
from app.domains.users.schemas import (
    UserCreate,
    UserFilter,
    UserResponse,
    UserUpdate,
)
from app.domains.users.service import UserService

logger = get_logger(__name__)


class UserPolicy:
    """사용자 리소스 정책"""

    def __init__(self, service: UserService):
        self.service = service

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        """사용자 생성

        Raises:
            UserEmailAlreadyExistsException: 이메일이 이미 사용 중인 경우
        """
        # 동시 요청은 이 검사를 함께 통과할 수 있으며, 이 경우 DB UNIQUE 제약이
        # 리포지토리에서 같은 예외로 변환된다.
        if await self.service.find_by_email(user_data.email) is not None:
            logger.warning(
                "User creation rejected: email already exists",
                extra={"request_id": get_request_id()},
            )
            raise UserEmailAlreadyExistsException(email=user_data.email)

        return await self.service.create(user_data)

    async def list_users(self, user_filter: UserFilter) -> list[UserResponse]:
        """사용자 목록 조회"""
        return await self.service.find_all(user_filter)

    async def get_user(self, user_id: int) -> UserResponse:
        """사용자 상세 조회

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
        """
        user = await self.service.find_by_id(user_id)
        if user is None:
            raise UserNotFoundException(user_id=user_id)
        return user

    async def update_user(
        self, user_id: int, user_data: UserUpdate
    ) -> UserResponse:
        """사용자 수정

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
            UserAlreadyDeletedException: 이미 삭제된 사용자인 경우
        """
        await self._get_active_user(user_id, action="update")
        updated = await self.service.update(user_id, user_data)
        if updated is None:
            raise UserNotFoundException(user_id=user_id)
        return updated

    async def delete_user(self, user_id: int) -> UserResponse:
        """사용자 삭제 (Soft Delete)

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
            UserAlreadyDeletedException: 이미 삭제된 사용자인 경우
        """
        await self._get_active_user(user_id, action="delete")
        deleted = await self.service.remove(user_id)
        if deleted is None:
            raise UserNotFoundException(user_id=user_id)
        return deleted

    async def _get_active_user(self, user_id: int, action: str) -> UserResponse:
        user = await self.service.find_by_id(user_id)

        if user is None:
            raise UserNotFoundException(user_id=user_id)

        if user.deleted_at is not None:
            logger.warning(
                f"User {action} rejected: already deleted",
                extra={"request_id": get_request_id(), "user_id": user_id},
            )
            raise UserAlreadyDeletedException(user_id=user_id)

        return user
