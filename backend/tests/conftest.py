"""Test fixtures for the backend."""
import os
from pathlib import Path
import tempfile

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

test_db_path = Path(tempfile.gettempdir()) / "hrms_test_backend.db"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"
os.environ.setdefault("SECRET_KEY", "test-secret")

from hrms.database import create_schema, drop_schema, engine  # noqa: E402
from hrms.main import app  # noqa: E402

ACCOUNT = "acme"
PASSWORD = "secret123"


@pytest_asyncio.fixture(autouse=True)
async def prepare_database():
    """Give every test a fresh schema."""

    await create_schema()
    yield
    await drop_schema()
    await engine.dispose()
    if test_db_path.exists():
        test_db_path.unlink()


@pytest_asyncio.fixture
async def client() -> AsyncClient:
    """Provide an HTTP client for integration tests."""

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


async def login_headers(client: AsyncClient, username: str, account_id: str = ACCOUNT) -> dict[str, str]:
    """Register ``username`` (if needed) and return bearer headers."""

    payload = {"username": username, "password": PASSWORD, "account_id": account_id}
    await client.post("/api/auth/register", json=payload)
    response = await client.post("/api/auth/login", json=payload)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest_asyncio.fixture
async def admin_headers(client: AsyncClient) -> dict[str, str]:
    """The first user of the account, who becomes its admin."""

    return await login_headers(client, "owner")


async def create_employee(client: AsyncClient, headers: dict, **fields) -> dict:
    payload = {"code": "E-001", "first_name": "Asha", "last_name": "Patil", "salary": 30000.0}
    payload.update(fields)
    response = await client.post("/api/employees/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def linked_employee_headers(
    client: AsyncClient, admin_headers: dict, username: str, employee_id: int
) -> dict[str, str]:
    """Register a plain user and link it to ``employee_id``."""

    headers = await login_headers(client, username)
    users = (await client.get("/api/users/", headers=admin_headers)).json()
    user_id = next(u["id"] for u in users if u["username"] == username)
    response = await client.patch(f"/api/users/{user_id}", json={"employee_id": employee_id}, headers=admin_headers)
    assert response.status_code == 200, response.text
    return headers
