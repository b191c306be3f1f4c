"""Users 도메인 리포지토리

users 테이블에 대한 데이터 접근 계층입니다. 기본 조회는 Soft Delete된
행을 제외하며, include_deleted=True로 포함할 수 있습니다.
"""

from typing import Any, Optional, Sequence, cast

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.utils.datetime import now_utc
from app.domains.users.exceptions import UserEmailAlreadyExistsException
from app.domains.users.models import User


class UserRepository:
    """사용자 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, user_id: int, include_deleted: bool = False
    ) -> Optional[User]:
        """ID로 사용자 조회

        Args:
            user_id: 사용자 ID
            include_deleted: 삭제된 사용자 포함 여부 (기본: False)

        Returns:
            사용자 객체 또는 None
        """
        query = select(User).where(User.id == user_id)

        if not include_deleted:
            query = query.where(User.deleted_at.is_(None))

        result = await self.session.execute(query)
        return cast(Optional[User], result.scalar_one_or_none())

    async def get_by_email(
        self, email: str, include_deleted: bool = False
    ) -> Optional[User]:
        """이메일로 사용자 조회

        Args:
            email: 이메일
            include_deleted: 삭제된 사용자 포함 여부 (기본: False)

        Returns:
            사용자 객체 또는 None
        """
        query = select(User).where(User.email == email)

        if not include_deleted:
            query = query.where(User.deleted_at.is_(None))

        result = await self.session.execute(query)
        return cast(Optional[User], result.scalar_one_or_none())

    async def get_list(
        self,
        offset: int = 0,
        limit: int = 25,
        order_by: Optional[ColumnElement[Any]] = None,
        include_deleted: bool = False,
    ) -> Sequence[User]:
        """사용자 목록 조회

        Args:
            offset: 건너뛸 레코드 수
            limit: 조회할 최대 레코드 수
            order_by: 정렬 절 (단일 키), None이면 ID 오름차순
            include_deleted: 삭제된 사용자 포함 여부 (기본: False)

        Returns:
            사용자 목록
        """
        query = select(User)

        if not include_deleted:
            query = query.where(User.deleted_at.is_(None))

        query = (
            query.order_by(order_by if order_by is not None else User.id.asc())
            .offset(offset)
            .limit(limit)
        )

        result = await self.session.execute(query)
        return cast(Sequence[User], result.scalars().all())

    async def create(self, user: User) -> User:
        """사용자 생성

        email UNIQUE 제약 위반은 SAVEPOINT 롤백 후 충돌 예외로 변환합니다.

        Args:
            user: 생성할 사용자 객체

        Returns:
            생성된 사용자 객체 (id, created_at 채워짐)

        Raises:
            UserEmailAlreadyExistsException: 이메일이 이미 존재하는 경우
        """
        try:
            async with self.session.begin_nested():
                self.session.add(user)
                await self.session.flush()
        except IntegrityError as e:
            raise UserEmailAlreadyExistsException(email=user.email) from e

        await self.session.refresh(user)
        return user

    async def update(self, user_id: int, values: dict[str, Any]) -> None:
        """사용자 필드 부분 수정

        Args:
            user_id: 수정할 사용자 ID
            values: 컬럼명 → 새 값 (비어 있으면 아무 것도 하지 않음)
        """
        if not values:
            return

        await self.session.execute(
            update(User).where(User.id == user_id).values(**values)
        )
        # 이후 조회가 세션 캐시의 이전 값을 돌려주지 않도록 만료
        self.session.expire_all()

    async def soft_delete(self, user_id: int) -> None:
        """사용자 Soft Delete

        이미 삭제된 행의 deleted_at은 변경하지 않습니다.

        Args:
            user_id: 삭제할 사용자 ID
        """
        await self.session.execute(
            update(User)
            .where(User.id == user_id, User.deleted_at.is_(None))
            .values(deleted_at=now_utc())
        )
        self.session.expire_all()
