"""유틸리티 모듈"""

from app.core.utils.datetime import UTC, now_utc
from app.core.utils.time import measure_time
from app.core.utils.validators import parse_boolean

__all__ = [
    # datetime
    "UTC",
    "now_utc",
    # time measurement
    "measure_time",
    # validators
    "parse_boolean",
]
