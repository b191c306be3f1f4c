"""Users 도메인 모듈

사용자 생성/조회/수정/Soft Delete를 제공하는 도메인입니다.

구조:
    - models.py: SQLAlchemy 모델 정의 (User)
    - schemas.py: Pydantic 스키마 (UserCreate, UserUpdate, UserFilter, UserResponse)
    - repository.py: 데이터 접근 계층
    - service.py: 리포지토리 호출과 응답 표현 매핑
    - policy.py: 리소스 규칙 (이메일 중복, 삭제 상태 차단)
    - router.py: API 엔드포인트
    - exceptions.py: 도메인 예외
"""

from app.domains.users.exceptions import (
    UserAlreadyDeletedException,
    UserEmailAlreadyExistsException,
    UserErrorCode,
    UserNotFoundException,
)
from app.domains.users.models import User
from app.domains.users.policy import UserPolicy
from app.domains.users.router import router
from app.domains.users.schemas import (
    SortOrder,
    UserCreate,
    UserFilter,
    UserResponse,
    UserSortField,
    UserUpdate,
)
from app.domains.users.service import UserService

__all__ = [
    "User",
    "UserService",
    "UserPolicy",
    "UserCreate",
    "UserUpdate",
    "UserFilter",
    "UserResponse",
    "UserSortField",
    "SortOrder",
    "router",
    "UserErrorCode",
    "UserNotFoundException",
    "UserAlreadyDeletedException",
    "UserEmailAlreadyExistsException",
]
