"""Tests for registration, login and bearer token handling."""

import pytest

from booking_platform_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from conftest import PASSWORD, login, register, user_payload


def test_password_hash_roundtrip():
    hashed = hash_password("hunter22")
    assert "$" in hashed
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)
    assert not verify_password("hunter22", "not-a-hash")


def test_token_signature_and_expiry():
    token = create_access_token({"sub": "a@example.com"})
    assert decode_access_token(token)["sub"] == "a@example.com"

    header, payload, signature = token.split(".")
    assert decode_access_token(f"{header}.{payload}.{signature[:-2]}AA") is None
    assert decode_access_token("garbage") is None

    expired = create_access_token({"sub": "a@example.com"}, expires_delta=-10)
    assert decode_access_token(expired) is None


@pytest.mark.asyncio
async def test_first_registered_user_becomes_admin(client):
    first = await register(client, "U1", role="Customer")
    second = await register(client, "U2", role="Customer")
    assert first["role"] == "Admin"
    assert second["role"] == "Customer"
    assert "password" not in first


@pytest.mark.asyncio
async def test_register_provider_creates_provider_profile(client, admin):
    user = await register(client, "P1", role="Provider")
    headers = await login(client, user["email"])
    response = await client.get("/api/providers/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["user_id"] == user["id"]
    assert response.json()["provider_name"] == user["full_name"]


@pytest.mark.asyncio
async def test_self_registration_cannot_pick_admin(client, admin):
    response = await client.post("/api/auth/register", json=user_payload("X1", role="Admin"))
    assert response.status_code == 400
    assert response.json()["detail"] == "Validation error"


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected(client, admin):
    await register(client, "D1")
    response = await client.post(
        "/api/auth/register", json=user_payload("D2", email="d1@example.com")
    )
    assert response.status_code == 400
    assert "already exists" in response.json()["detail"]


@pytest.mark.asyncio
async def test_login_and_me(client, customer):
    user, headers = customer
    response = await client.get("/api/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["email"] == user["email"]


@pytest.mark.asyncio
async def test_login_is_case_insensitive_on_email(client, customer):
    user, _ = customer
    await login(client, user["email"].upper(), PASSWORD)


@pytest.mark.asyncio
async def test_login_with_wrong_password(client, customer):
    user, _ = customer
    response = await client.post("/api/auth/login", json={"email": user["email"], "password": "wrong!!"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_missing_or_invalid_token(client, admin):
    assert (await client.get("/api/auth/me")).status_code == 401
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_disabled_account_cannot_log_in(client, admin, customer):
    _, admin_headers = admin
    user, headers = customer
    response = await client.put(f"/api/users/{user['id']}", json={"active": False}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["active"] is False

    assert (await client.get("/api/auth/me", headers=headers)).status_code == 401
    response = await client.post("/api/auth/login", json={"email": user["email"], "password": PASSWORD})
    assert response.status_code == 401
