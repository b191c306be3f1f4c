"""Users 도메인 모델 정의

삭제는 deleted_at을 기록하는 Soft Delete 방식이며, 행은 물리적으로
삭제되지 않습니다.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, String, UniqueConstraint, func, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base

# users.id는 INTEGER(int4) 컬럼
ID_MAX = 2_147_483_647
EMAIL_MAX_LENGTH = 254
NAME_MAX_LENGTH = 100


class User(Base):
    """사용자 모델

    email은 삭제된 사용자를 포함한 전체 행에서 유일합니다.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        Index(
            "idx_users_active",
            "id",
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="사용자 ID",
    )
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH),
        nullable=False,
        comment="이메일 (삭제된 사용자 포함 유일)",
    )
    first_name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False, comment="이름"
    )
    last_name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False, comment="성"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="삭제 일시 (Soft Delete)"
    )

    def __repr__(self) -> str:
        return (
            f"<User(id={self.id}, email={self.email}, "
            f"deleted_at={self.deleted_at})>"
        )
