"""테스트 설정"""

import os
from datetime import datetime, timezone
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from docker import from_env
from docker.errors import DockerException
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from app.core.database import Base, get_db
from app.domains.users.router import get_user_service
from app.domains.users.schemas import UserResponse
from app.domains.users.service import UserService
from app.main import app


def _is_docker_available() -> bool:
    """로컬 환경에서 Docker 접근 가능 여부 확인"""
    if os.getenv("FORCE_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return True
    if os.getenv("SKIP_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return False

    try:
        client = from_env()
        client.ping()
        return True
    except DockerException:
        return False
    except Exception:
        return False


DOCKER_AVAILABLE = _is_docker_available()


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """PostgreSQL 테스트 컨테이너"""
    if not DOCKER_AVAILABLE:
        pytest.skip("Docker is not available; skipping container-based tests.")

    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def test_database_url(postgres_container: PostgresContainer) -> str:
    """테스트 데이터베이스 URL (asyncpg)"""
    return str(
        postgres_container.get_connection_url().replace(
            "postgresql+psycopg2://", "postgresql+asyncpg://"
        )
    )


# NOTE:
# pytest-asyncio는 테스트마다 독립적인 event loop를 생성하므로
# async fixture는 모두 function 스코프로 유지
@pytest_asyncio.fixture
async def db_session(test_database_url: str):
    """테스트 데이터베이스 세션 (테스트마다 스키마 재생성)"""
    engine = create_async_engine(test_database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session):
    """비동기 테스트 클라이언트 (테스트 DB 사용)"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def mock_user_service():
    """DB 없이 사용하는 Mock UserService"""
    service = MagicMock(spec=UserService)
    service.create = AsyncMock()
    service.find_all = AsyncMock(return_value=[])
    service.find_by_id = AsyncMock(return_value=None)
    service.find_by_email = AsyncMock(return_value=None)
    service.update = AsyncMock()
    service.remove = AsyncMock()
    return service


@pytest_asyncio.fixture
async def api_client(mock_user_service):
    """UserService를 Mock으로 대체한 테스트 클라이언트"""
    app.dependency_overrides[get_user_service] = lambda: mock_user_service

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def user_response_factory():
    """UserResponse 생성 팩토리"""

    def _factory(
        user_id: int = 1,
        email: str = "dmitry@gmail.com",
        first_name: str = "Dmitry",
        last_name: str = "Lyu",
        deleted: bool = False,
    ) -> UserResponse:
        return UserResponse(
            id=user_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            created_at=datetime(2026, 1, 1, 12, 30, 45, tzinfo=timezone.utc),
            deleted_at=(
                datetime(2026, 2, 1, 9, 0, 0, tzinfo=timezone.utc)
                if deleted
                else None
            ),
        )

    return _factory


@pytest.fixture
def anyio_backend():
    """anyio 백엔드 설정"""
    return "asyncio"
