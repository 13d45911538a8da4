"""Tests for provider, admin and customer profiles."""

import pytest

from conftest import register


@pytest.mark.asyncio
async def test_provider_profile_requires_provider_role(client, admin, customer):
    _, headers = admin
    user, _ = customer
    response = await client.post(
        "/api/providers/",
        json={"provider_code": "P1", "user_id": user["id"], "provider_name": "Shop", "address": "1 Main St"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "The user must have the Provider role"


@pytest.mark.asyncio
async def test_one_provider_per_user(client, admin, provider):
    _, headers = admin
    user, _ = provider
    response = await client.post(
        "/api/providers/",
        json={"provider_code": "P2", "user_id": user["id"], "provider_name": "Again", "address": "2 Main St"},
        headers=headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_provider_updates_own_profile(client, provider, other_provider):
    _, headers = provider
    _, other_headers = other_provider
    me = (await client.get("/api/providers/me", headers=headers)).json()
    assert me["user_email"] == "prv1@example.com"

    response = await client.put(f"/api/providers/{me['id']}", json={"address": "Beach road"}, headers=headers)
    assert response.json()["address"] == "Beach road"

    response = await client.put(f"/api/providers/{me['id']}", json={"address": "Hijacked"}, headers=other_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_admin_profile(client, admin):
    user, headers = admin
    response = await client.post(
        "/api/admins/", json={"admin_code": "ADM", "user_id": user["id"], "access_level": "SuperAdmin"}, headers=headers
    )
    assert response.status_code == 201
    record = response.json()
    assert record["user_full_name"] == user["full_name"]

    response = await client.put(f"/api/admins/{record['id']}", json={"access_level": "Support"}, headers=headers)
    assert response.json()["access_level"] == "Support"


@pytest.mark.asyncio
async def test_admin_profile_rejects_non_admin(client, admin, customer):
    _, headers = admin
    user, _ = customer
    response = await client.post(
        "/api/admins/", json={"admin_code": "ADM", "user_id": user["id"], "access_level": "x"}, headers=headers
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_customer_profile(client, admin):
    _, headers = admin
    user = await register(client, "C9")
    response = await client.post(
        "/api/customers/", json={"customer_code": "CUS9", "user_id": user["id"], "loyalty_points": 5}, headers=headers
    )
    assert response.status_code == 201
    customer = response.json()
    assert customer["active"] is True

    response = await client.put(f"/api/customers/{customer['id']}", json={"loyalty_points": -1}, headers=headers)
    assert response.status_code == 400

    assert (await client.delete(f"/api/customers/{customer['id']}", headers=headers)).status_code == 204
    assert (await client.get(f"/api/customers/{customer['id']}", headers=headers)).status_code == 404
