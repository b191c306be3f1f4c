"""입력 값 파싱 유틸리티"""

from typing import Any


def parse_boolean(value: Any, field_name: str = "value") -> bool:
    """문자열 토큰 "true"/"false" 또는 bool만 허용하는 불리언 파서

    쿼리 문자열의 "1", "yes", "on" 같은 값은 허용하지 않는다.

    Args:
        value: 원본 값
        field_name: 에러 메시지에 사용할 필드명

    Returns:
        파싱된 bool

    Raises:
        ValueError: 허용되지 않는 값인 경우
    """
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"{field_name} must be a boolean value")
