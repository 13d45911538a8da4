"""Test fixtures."""

import os
import tempfile

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment before importing app
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="booking-uploads-")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from booking_platform_api.app.core.config import settings
from booking_platform_api.app.core.db import init_db
from booking_platform_api.app.main import app


PASSWORD = "secret123"


def user_payload(code: str, role: str = "Customer", **overrides) -> dict:
    payload = {
        "user_code": code,
        "full_name": f"User {code}",
        "phone_number": "0901234567",
        "email": f"{code.lower()}@example.com",
        "user_name": code.lower(),
        "birth_date": "1990-01-01",
        "password": PASSWORD,
        "role": role,
    }
    payload.update(overrides)
    return payload


async def register(client: AsyncClient, code: str, role: str = "Customer") -> dict:
    response = await client.post("/api/auth/register", json=user_payload(code, role))
    assert response.status_code == 201, response.text
    return response.json()


async def login(client: AsyncClient, email: str, password: str = PASSWORD) -> dict:
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture(autouse=True)
def database(tmp_path):
    """Fresh SQLite database for every test."""
    settings.database_url = str(tmp_path / "test.db")
    init_db()
    yield settings.database_url


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin(client):
    """The first registered account, which is promoted to Admin."""
    user = await register(client, "ADM1", role="Customer")
    return user, await login(client, user["email"])


@pytest_asyncio.fixture
async def provider(client, admin):
    user = await register(client, "PRV1", role="Provider")
    return user, await login(client, user["email"])


@pytest_asyncio.fixture
async def other_provider(client, admin):
    user = await register(client, "PRV2", role="Provider")
    return user, await login(client, user["email"])


@pytest_asyncio.fixture
async def customer(client, admin):
    user = await register(client, "CUS1", role="Customer")
    return user, await login(client, user["email"])


async def provider_id_for(client: AsyncClient, headers: dict) -> int:
    response = await client.get("/api/providers/me", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["id"]


async def create_service(client: AsyncClient, headers: dict, code: str = "SRV1", **fields) -> dict:
    payload = {"service_code": code, "service_name": f"Service {code}", "price": 100.0}
    payload.update(fields)
    response = await client.post("/api/services/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def create_hotel(client: AsyncClient, headers: dict, service_id: int, code: str = "HT1", **fields) -> dict:
    payload = {"hotel_code": code, "service_id": service_id, "star_rating": 4, "room_capacity": 20}
    payload.update(fields)
    response = await client.post("/api/hotels/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def create_room(client: AsyncClient, headers: dict, hotel_id: int, code: str = "R1", **fields) -> dict:
    payload = {
        "room_code": code,
        "hotel_id": hotel_id,
        "room_type": "Deluxe",
        "available_rooms": 3,
        "available_date": "2030-01-01",
        "price": 80.0,
        "capacity": {"adults": 2, "children": 1},
    }
    payload.update(fields)
    response = await client.post("/api/rooms/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()

