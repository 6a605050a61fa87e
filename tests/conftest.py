import pytest
from fastapi.testclient import TestClient

from users_api.adapters.repository import InMemoryUserRepository
from users_api.entrypoints.api import create_app
from users_api.entrypoints.routers.users import get_repository

USERS_URL = "/api/users"


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def client(repository: InMemoryUserRepository) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_repository] = lambda: repository
    return TestClient(app)


@pytest.fixture
def create_user(client: TestClient):
    def _create(login: str = "johndoe375", first_name: str = "John", last_name: str = "Doe") -> str:
        response = client.post(
            USERS_URL,
            json={"login": login, "firstName": first_name, "lastName": last_name},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
