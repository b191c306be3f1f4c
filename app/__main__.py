"""`python -m app`으로 개발 서버 실행"""

import uvicorn

from app.core.config import settings


def main() -> None:
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_config=None,  # setup_logging() 설정 유지
    )


if __name__ == "__main__":
    main()
