"""Users API 통합 테스트 - 상태 코드, 응답 형식, 검증 실패 시 부작용 없음

UserService는 Mock으로 대체하고 라우터, 정책, 검증 계층을 함께 검증합니다.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.domains.users.repository import UserRepository
from app.domains.users.router import get_user_service
from app.domains.users.schemas import SortOrder, UserSortField
from app.domains.users.service import UserService
from app.main import app

VALID_PAYLOAD = {"email": "a@x.com", "firstName": "A", "lastName": "B"}


def assert_validation_error(response, field=None):
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error"]["code"] == "VALIDATION_ERROR"
    if field is not None:
        fields = [error["field"] for error in data["error"]["detail"]["errors"]]
        assert field in fields


def assert_no_service_calls(service):
    for method in (
        service.create,
        service.find_all,
        service.find_by_id,
        service.find_by_email,
        service.update,
        service.remove,
    ):
        method.assert_not_called()


class TestCreateUserAPI:
    """POST /users"""

    @pytest.mark.asyncio
    async def test_create_user(
        self, api_client, mock_user_service, user_response_factory
    ):
        """생성 성공 시 201과 사용자 표현 반환"""
        mock_user_service.create.return_value = user_response_factory(
            email="a@x.com", first_name="A", last_name="B"
        )

        response = await api_client.post("/users", json=VALID_PAYLOAD)

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {
            "id",
            "email",
            "firstName",
            "lastName",
            "createdAt",
            "deletedAt",
        }
        assert data["id"] == 1
        assert data["email"] == "a@x.com"
        assert data["firstName"] == "A"
        assert data["lastName"] == "B"
        assert data["createdAt"].startswith("2026-01-01T12:30:45")
        assert data["deletedAt"] is None
        mock_user_service.find_by_email.assert_called_once_with("a@x.com")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("deleted", [False, True])
    async def test_create_user_email_conflict(
        self, api_client, mock_user_service, user_response_factory, deleted
    ):
        """이메일이 이미 있으면 (삭제된 사용자 포함) 409, 저장 없음"""
        mock_user_service.find_by_email.return_value = user_response_factory(
            email="a@x.com", deleted=deleted
        )

        response = await api_client.post("/users", json=VALID_PAYLOAD)

        assert response.status_code == 409
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "USER_EMAIL_ALREADY_EXISTS"
        mock_user_service.create.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("payload", "field"),
        [
            ({**VALID_PAYLOAD, "email": "invalid"}, "email"),
            ({**VALID_PAYLOAD, "firstName": ""}, "firstName"),
            ({**VALID_PAYLOAD, "lastName": "a" * 101}, "lastName"),
            ({"email": "a@x.com", "firstName": "A"}, "lastName"),
            ({**VALID_PAYLOAD, "isAdmin": True}, "isAdmin"),
        ],
    )
    async def test_create_user_validation_error(
        self, api_client, mock_user_service, payload, field
    ):
        """검증 실패는 400, 서비스 호출 없음"""
        response = await api_client.post("/users", json=payload)

        assert_validation_error(response, field)
        assert_no_service_calls(mock_user_service)

    @pytest.mark.asyncio
    async def test_create_user_without_body(
        self, api_client, mock_user_service
    ):
        response = await api_client.post("/users")

        assert_validation_error(response)
        assert_no_service_calls(mock_user_service)


class TestListUsersAPI:
    """GET /users"""

    @pytest.mark.asyncio
    async def test_list_users_defaults(
        self, api_client, mock_user_service, user_response_factory
    ):
        """기본 필터로 목록 조회"""
        mock_user_service.find_all.return_value = [
            user_response_factory(1, email="a@x.com"),
            user_response_factory(2, email="b@x.com"),
        ]

        response = await api_client.get("/users")

        assert response.status_code == 200
        data = response.json()
        assert [user["id"] for user in data] == [1, 2]

        user_filter = mock_user_service.find_all.call_args.args[0]
        assert user_filter.limit == 25
        assert user_filter.offset == 0
        assert user_filter.sort == UserSortField.ID
        assert user_filter.order == SortOrder.ASC
        assert user_filter.show_deleted is False

    @pytest.mark.asyncio
    async def test_list_users_empty(self, api_client):
        response = await api_client.get("/users")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_users_with_filter(self, api_client, mock_user_service):
        response = await api_client.get(
            "/users",
            params={
                "limit": "100",
                "offset": "10",
                "sort": "lastName",
                "order": "DESC",
                "showDeleted": "true",
            },
        )

        assert response.status_code == 200
        user_filter = mock_user_service.find_all.call_args.args[0]
        assert user_filter.limit == 100
        assert user_filter.offset == 10
        assert user_filter.sort == UserSortField.LAST_NAME
        assert user_filter.order == SortOrder.DESC
        assert user_filter.show_deleted is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("query", "field"),
        [
            ("limit=0", "limit"),
            ("limit=101", "limit"),
            ("limit=abc", "limit"),
            ("offset=-1", "offset"),
            ("sort=invalid", "sort"),
            ("order=up", "order"),
            ("showDeleted=yes", "showDeleted"),
            ("showDeleted=1", "showDeleted"),
        ],
    )
    async def test_list_users_invalid_query(
        self, api_client, mock_user_service, query, field
    ):
        """잘못된 쿼리 값은 400, 조회 없음"""
        response = await api_client.get(f"/users?{query}")

        assert_validation_error(response, field)
        errors = response.json()["error"]["detail"]["errors"]
        assert errors[0]["location"] == "query"
        mock_user_service.find_all.assert_not_called()


class TestGetUserAPI:
    """GET /users/{id}"""

    @pytest.mark.asyncio
    async def test_get_user(
        self, api_client, mock_user_service, user_response_factory
    ):
        mock_user_service.find_by_id.return_value = user_response_factory()

        response = await api_client.get("/users/1")

        assert response.status_code == 200
        assert response.json()["id"] == 1
        mock_user_service.find_by_id.assert_called_once_with(1)

    @pytest.mark.asyncio
    async def test_get_deleted_user(
        self, api_client, mock_user_service, user_response_factory
    ):
        """삭제된 사용자도 단건 조회는 200"""
        mock_user_service.find_by_id.return_value = user_response_factory(
            deleted=True
        )

        response = await api_client.get("/users/1")

        assert response.status_code == 200
        assert response.json()["deletedAt"] is not None

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, api_client):
        response = await api_client.get("/users/999999")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_user_invalid_id(self, api_client, mock_user_service):
        """숫자가 아닌 ID는 조회 전에 400"""
        response = await api_client.get("/users/abc")

        assert_validation_error(response, "user_id")
        assert_no_service_calls(mock_user_service)


class TestUpdateUserAPI:
    """PUT /users/{id}"""

    @pytest.mark.asyncio
    async def test_update_user(
        self, api_client, mock_user_service, user_response_factory
    ):
        mock_user_service.find_by_id.return_value = user_response_factory()
        mock_user_service.update.return_value = user_response_factory(
            first_name="New"
        )

        response = await api_client.put("/users/1", json={"firstName": "New"})

        assert response.status_code == 200
        data = response.json()
        assert data["firstName"] == "New"
        assert data["lastName"] == "Lyu"

        user_id, user_data = mock_user_service.update.call_args.args
        assert user_id == 1
        assert user_data.changes() == {"first_name": "New"}

    @pytest.mark.asyncio
    async def test_update_user_empty_body(
        self, api_client, mock_user_service, user_response_factory
    ):
        """필드가 없는 수정 요청도 허용"""
        mock_user_service.find_by_id.return_value = user_response_factory()
        mock_user_service.update.return_value = user_response_factory()

        response = await api_client.put("/users/1", json={})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_update_user_without_body(
        self, api_client, mock_user_service, user_response_factory
    ):
        """본문 없는 수정 요청은 빈 객체와 동일하게 처리"""
        mock_user_service.find_by_id.return_value = user_response_factory()
        mock_user_service.update.return_value = user_response_factory()

        response = await api_client.put("/users/1")

        assert response.status_code == 200
        user_id, user_data = mock_user_service.update.call_args.args
        assert user_id == 1
        assert user_data.changes() == {}

    @pytest.mark.asyncio
    async def test_update_user_not_found(self, api_client, mock_user_service):
        response = await api_client.put("/users/999", json={"firstName": "X"})

        assert response.status_code == 404
        mock_user_service.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_deleted_user(
        self, api_client, mock_user_service, user_response_factory
    ):
        """삭제된 사용자 수정은 404"""
        mock_user_service.find_by_id.return_value = user_response_factory(
            deleted=True
        )

        response = await api_client.put("/users/1", json={"firstName": "X"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "USER_ALREADY_DELETED"
        mock_user_service.update.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("payload", "field"),
        [
            ({"firstName": ""}, "firstName"),
            ({"lastName": ""}, "lastName"),
            ({"email": "b@x.com"}, "email"),
        ],
    )
    async def test_update_user_validation_error(
        self, api_client, mock_user_service, payload, field
    ):
        response = await api_client.put("/users/1", json=payload)

        assert_validation_error(response, field)
        assert_no_service_calls(mock_user_service)

    @pytest.mark.asyncio
    async def test_update_user_invalid_id(self, api_client, mock_user_service):
        response = await api_client.put("/users/abc", json={"firstName": "X"})

        assert_validation_error(response, "user_id")
        assert_no_service_calls(mock_user_service)


class TestDeleteUserAPI:
    """DELETE /users/{id}"""

    @pytest.mark.asyncio
    async def test_delete_user(
        self, api_client, mock_user_service, user_response_factory
    ):
        mock_user_service.find_by_id.return_value = user_response_factory()
        mock_user_service.remove.return_value = user_response_factory(
            deleted=True
        )

        response = await api_client.delete("/users/1")

        assert response.status_code == 200
        assert response.json()["deletedAt"] is not None
        mock_user_service.remove.assert_called_once_with(1)

    @pytest.mark.asyncio
    async def test_delete_user_not_found(self, api_client, mock_user_service):
        response = await api_client.delete("/users/999999")

        assert response.status_code == 404
        mock_user_service.remove.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_already_deleted_user(
        self, api_client, mock_user_service, user_response_factory
    ):
        """이미 삭제된 사용자 삭제는 404"""
        mock_user_service.find_by_id.return_value = user_response_factory(
            deleted=True
        )

        response = await api_client.delete("/users/1")

        assert response.status_code == 404
        mock_user_service.remove.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_user_invalid_id(self, api_client, mock_user_service):
        response = await api_client.delete("/users/1.5")

        assert_validation_error(response, "user_id")
        assert_no_service_calls(mock_user_service)


@pytest.fixture
def mock_user_repository():
    """DB 없이 사용하는 Mock UserRepository"""
    repository = MagicMock(spec=UserRepository)
    repository.get_by_id = AsyncMock(return_value=None)
    repository.update = AsyncMock()
    repository.soft_delete = AsyncMock()
    return repository


@pytest_asyncio.fixture
async def service_client(mock_user_repository):
    """실제 UserService + Mock 리포지토리를 사용하는 테스트 클라이언트"""
    service = UserService(MagicMock())
    service.repository = mock_user_repository
    app.dependency_overrides[get_user_service] = lambda: service

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


class TestOutOfRangeUserId:
    """INTEGER 컬럼 범위를 벗어난 정수 ID"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "kwargs"),
        [
            ("GET", {}),
            ("PUT", {"json": {"firstName": "X"}}),
            ("DELETE", {}),
        ],
    )
    async def test_large_id_is_not_found(
        self, service_client, mock_user_repository, method, kwargs
    ):
        """정수 형식이면 범위를 벗어나도 400/500이 아닌 404, DB 접근 없음"""
        response = await service_client.request(
            method, "/users/3000000000", **kwargs
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"
        mock_user_repository.get_by_id.assert_not_called()
        mock_user_repository.update.assert_not_called()
        mock_user_repository.soft_delete.assert_not_called()
