"""Integration tests for /api/v1/users and /api/v1/validation."""

import pytest
import pytest_asyncio
from fastapi import APIRouter
from httpx import ASGITransport, AsyncClient

from recordhub.config import Settings
from recordhub.domain.exceptions import StorageError
from recordhub.infrastructure.storage import InMemoryKeyValueStore, KeyValueUserRepository
from recordhub.main import create_app

REGISTRATION = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "phone": "(555) 123-4567",
    "age": 36,
    "country": "United Kingdom",
    "password": "Secret@123",
    "confirmPassword": "Secret@123",
}


@pytest_asyncio.fixture
async def client():
    app = create_app(Settings(_env_file=None, password_hash_rounds=4))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.mark.asyncio
async def test_register_never_returns_password(client: AsyncClient):
    response = await client.post("/api/v1/users", json=REGISTRATION)

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "ada@example.com"
    assert "registrationDate" in body
    assert not {"password", "passwordHash", "confirmPassword"} & set(body)

    fetched = await client.get(f"/api/v1/users/{body['id']}")
    assert fetched.json() == body


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient):
    await client.post("/api/v1/users", json=REGISTRATION)

    response = await client.post(
        "/api/v1/users", json={**REGISTRATION, "email": " ADA@example.com "}
    )

    assert response.status_code == 400
    assert response.json()["errors"] == {"email": "This email has already been registered"}
    assert len((await client.get("/api/v1/users")).json()) == 1


@pytest.mark.asyncio
async def test_recent_and_stats(client: AsyncClient):
    for i, age in enumerate((20, 25, 31)):
        await client.post(
            "/api/v1/users", json={**REGISTRATION, "email": f"u{i}@example.com", "age": age}
        )

    recent = (await client.get("/api/v1/users/recent", params={"limit": 2})).json()
    assert [u["email"] for u in recent] == ["u2@example.com", "u1@example.com"]

    stats = (await client.get("/api/v1/users/stats")).json()
    assert stats == {"totalUsers": 3, "averageAge": 25, "usersThisWeek": 3}


@pytest.mark.asyncio
async def test_edit_and_delete_user(client: AsyncClient):
    user = (await client.post("/api/v1/users", json=REGISTRATION)).json()

    edited = await client.put(f"/api/v1/users/{user['id']}", json={"country": "France"})
    assert edited.status_code == 200
    assert edited.json()["country"] == "France"
    assert edited.json()["name"] == "Ada Lovelace"

    bad = await client.put(f"/api/v1/users/{user['id']}", json={"age": 12})
    assert bad.status_code == 400
    assert bad.json()["errors"] == {"age": "Age must be between 18 and 120"}

    deleted = await client.delete(f"/api/v1/users/{user['id']}")
    assert deleted.status_code == 204

    missing = await client.get(f"/api/v1/users/{user['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "User not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("password", "strength"),
    [("abc", "weak"), ("Password1", "medium"), ("Password1!", "strong")],
)
async def test_password_field_strength(client: AsyncClient, password: str, strength: str):
    response = await client.post(
        "/api/v1/validation/field", json={"field": "password", "value": password}
    )

    assert response.status_code == 200
    assert response.json()["strength"] == strength


@pytest.mark.asyncio
async def test_field_validation_checks_registered_emails(client: AsyncClient):
    user = (await client.post("/api/v1/users", json=REGISTRATION)).json()

    taken = (await client.post(
        "/api/v1/validation/field", json={"field": "email", "value": "ada@example.com"}
    )).json()
    own = (await client.post(
        "/api/v1/validation/field",
        json={"field": "email", "value": "ada@example.com", "excludeUserId": user["id"]},
    )).json()

    assert taken == {
        "field": "email",
        "valid": False,
        "error": "This email has already been registered",
        "strength": None,
    }
    assert own["valid"] is True


@pytest.mark.asyncio
async def test_field_validation_uses_context(client: AsyncClient):
    response = await client.post(
        "/api/v1/validation/field",
        json={"field": "confirmPassword", "value": "abc", "context": {"password": "abd"}},
    )

    assert response.json()["error"] == "Passwords do not match"


@pytest.mark.asyncio
async def test_unknown_field_is_rejected(client: AsyncClient):
    response = await client.post("/api/v1/validation/field", json={"field": "shoeSize", "value": 9})

    assert response.status_code == 400
    assert "field" in response.json()["errors"]


@pytest.mark.asyncio
async def test_unexpected_errors_hide_details_outside_development():
    app = create_app(Settings(_env_file=None, app_env="production", password_hash_rounds=4))
    boom = APIRouter()

    @boom.get("/boom")
    async def explode():
        raise RuntimeError("secret detail")

    app.include_router(boom)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}


class ReadOnlyKeyValueStore(InMemoryKeyValueStore):
    def set(self, key: str, value: str) -> None:
        raise StorageError(key, "disk full")


@pytest.mark.asyncio
async def test_storage_failure_returns_503():
    app = create_app(Settings(_env_file=None, password_hash_rounds=4))
    app.state.stores.users = KeyValueUserRepository(ReadOnlyKeyValueStore())

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/api/v1/users", json=REGISTRATION)
        listing = await client.get("/api/v1/users")

    assert response.status_code == 503
    assert response.json() == {"success": False, "message": "Error saving data. Please try again."}
    assert listing.json() == []
