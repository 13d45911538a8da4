"""Tests for user administration and account profiles."""

import pytest

from conftest import create_hotel, create_room, create_service, login, register, user_payload


@pytest.mark.asyncio
async def test_user_routes_require_admin(client, admin, customer):
    _, headers = customer
    assert (await client.get("/api/users/", headers=headers)).status_code == 403
    assert (await client.get("/api/users/")).status_code == 401


@pytest.mark.asyncio
async def test_admin_creates_and_lists_users(client, admin):
    _, headers = admin
    response = await client.post("/api/users/", json=user_payload("NEW1", role="Provider"), headers=headers)
    assert response.status_code == 201
    created = response.json()
    assert created["role"] == "Provider"

    response = await client.get("/api/users/", params={"role": "Provider"}, headers=headers)
    assert [u["id"] for u in response.json()] == [created["id"]]

    response = await client.get(f"/api/users/{created['id']}", headers=headers)
    assert response.json()["user_code"] == "NEW1"


@pytest.mark.asyncio
async def test_promoting_user_to_provider_creates_provider(client, admin, customer):
    _, admin_headers = admin
    user, _ = customer
    response = await client.put(f"/api/users/{user['id']}", json={"role": "Provider"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "Provider"

    providers = (await client.get("/api/providers/", headers=admin_headers)).json()
    assert [p["user_id"] for p in providers] == [user["id"]]
    assert providers[0]["provider_code"].startswith("PROV-")

    # A second promotion must not duplicate the provider record.
    await client.put(f"/api/users/{user['id']}", json={"role": "Provider"}, headers=admin_headers)
    assert len((await client.get("/api/providers/", headers=admin_headers)).json()) == 1


@pytest.mark.asyncio
async def test_password_change_takes_effect(client, admin, customer):
    _, admin_headers = admin
    user, _ = customer
    await client.put(f"/api/users/{user['id']}", json={"password": "brand-new"}, headers=admin_headers)
    await login(client, user["email"], "brand-new")


@pytest.mark.asyncio
async def test_delete_user(client, admin, customer):
    _, admin_headers = admin
    user, _ = customer
    assert (await client.delete(f"/api/users/{user['id']}", headers=admin_headers)).status_code == 204
    assert (await client.get(f"/api/users/{user['id']}", headers=admin_headers)).status_code == 404
    assert (await client.delete(f"/api/users/{user['id']}", headers=admin_headers)).status_code == 404


@pytest.mark.asyncio
async def test_profile_by_code_includes_service_tree(client, provider):
    user, headers = provider
    service = await create_service(client, headers)
    hotel = await create_hotel(client, headers, service["id"])
    room = await create_room(client, headers, hotel["id"])

    response = await client.get(f"/api/users/by-code/{user['user_code']}")
    assert response.status_code == 200
    profile = response.json()
    assert [s["id"] for s in profile["services"]] == [service["id"]]
    hotels = profile["services"][0]["hotels"]
    assert hotels[0]["id"] == hotel["id"]
    assert hotels[0]["rooms"][0]["id"] == room["id"]
    assert profile["services"][0]["restaurants"] == []


@pytest.mark.asyncio
async def test_profile_by_unknown_code(client):
    assert (await client.get("/api/users/by-code/NOPE")).status_code == 404


@pytest.mark.asyncio
async def test_customer_profile_has_no_services(client, customer):
    user, _ = customer
    response = await client.get(f"/api/users/by-code/{user['user_code']}")
    assert response.json()["services"] == []


@pytest.mark.asyncio
async def test_registering_after_admin_keeps_requested_role(client, admin):
    user = await register(client, "LATE", role="Provider")
    assert user["role"] == "Provider"
