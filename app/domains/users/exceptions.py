"""Users 도메인 예외 정의"""

from enum import Enum

from app.core.exceptions import ConflictException, NotFoundException


class UserErrorCode(str, Enum):
    """사용자 도메인 에러 코드"""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_ALREADY_DELETED = "USER_ALREADY_DELETED"
    USER_EMAIL_ALREADY_EXISTS = "USER_EMAIL_ALREADY_EXISTS"


class UserNotFoundException(NotFoundException):
    """사용자를 찾을 수 없는 경우"""

    def __init__(self, user_id: int | None = None):
        detail = {"user_id": user_id} if user_id is not None else {}
        super().__init__(
            message="사용자를 찾을 수 없습니다.",
            error_code=UserErrorCode.USER_NOT_FOUND,
            detail=detail,
        )


class UserAlreadyDeletedException(NotFoundException):
    """이미 삭제된 사용자를 수정/삭제하려는 경우

    삭제된 사용자는 변경 요청에 대해 존재하지 않는 사용자와 동일하게
    404로 응답합니다.
    """

    def __init__(self, user_id: int | None = None):
        detail = {"user_id": user_id} if user_id is not None else {}
        super().__init__(
            message="이미 삭제된 사용자입니다.",
            error_code=UserErrorCode.USER_ALREADY_DELETED,
            detail=detail,
        )


class UserEmailAlreadyExistsException(ConflictException):
    """이메일이 이미 사용 중인 경우 (삭제된 사용자 포함)"""

    def __init__(self, email: str | None = None):
        detail = {"email": email} if email else {}
        super().__init__(
            message="이미 사용 중인 이메일입니다.",
            error_code=UserErrorCode.USER_EMAIL_ALREADY_EXISTS,
            detail=detail,
        )
