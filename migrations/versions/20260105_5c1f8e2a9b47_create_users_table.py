"""create_users_table

Revision ID: 5c1f8e2a9b47
Revises:
Create Date: 2026-01-05 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1f8e2a9b47"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """업그레이드 마이그레이션: users 테이블 생성"""
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="사용자 ID",
        ),
        sa.Column(
            "email",
            sa.String(length=254),
            nullable=False,
            comment="이메일 (삭제된 사용자 포함 유일)",
        ),
        sa.Column(
            "first_name",
            sa.String(length=100),
            nullable=False,
            comment="이름",
        ),
        sa.Column(
            "last_name",
            sa.String(length=100),
            nullable=False,
            comment="성",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
            comment="생성 일시",
        ),
        sa.Column(
            "deleted_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="삭제 일시 (Soft Delete)",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # Soft Delete를 위한 부분 인덱스 (deleted_at IS NULL인 레코드만 인덱싱)
    op.create_index(
        "idx_users_active",
        "users",
        ["id"],
        unique=False,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )


def downgrade() -> None:
    """다운그레이드 마이그레이션: users 테이블 삭제"""
    op.drop_index("idx_users_active", table_name="users")
    op.drop_table("users")
