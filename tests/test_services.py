"""Tests for services: ownership, link tables and images."""

import pytest

from conftest import create_service, provider_id_for


async def seed_lookups(client, headers):
    price = await client.post(
        "/api/price-categories/",
        json={"price_category_code": "PC1", "cheap": 10, "mid_range": 50, "luxury": 200},
        headers=headers,
    )
    suitability = await client.post(
        "/api/suitabilities/", json={"suitability_code": "SU1", "name": "Family"}, headers=headers
    )
    return price.json()["id"], suitability.json()["id"]


@pytest.mark.asyncio
async def test_provider_creates_own_service(client, provider):
    _, headers = provider
    service = await create_service(client, headers, description="By the sea")
    assert service["provider_id"] == await provider_id_for(client, headers)
    assert service["status"] == "Active"
    assert service["images"] == []
    assert service["review_ids"] == []


@pytest.mark.asyncio
async def test_admin_must_name_the_provider(client, admin, provider):
    _, admin_headers = admin
    _, provider_headers = provider
    payload = {"service_code": "S9", "service_name": "Admin made", "price": 10}
    response = await client.post("/api/services/", json=payload, headers=admin_headers)
    assert response.status_code == 400

    provider_id = await provider_id_for(client, provider_headers)
    service = await create_service(client, admin_headers, code="S9", provider_id=provider_id)
    assert service["provider_id"] == provider_id


@pytest.mark.asyncio
async def test_customer_cannot_create_service(client, customer):
    _, headers = customer
    response = await client.post(
        "/api/services/", json={"service_code": "S1", "service_name": "x", "price": 1}, headers=headers
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_discount_must_be_below_price(client, provider):
    _, headers = provider
    response = await client.post(
        "/api/services/",
        json={"service_code": "S1", "service_name": "x", "price": 100, "discount_price": 100},
        headers=headers,
    )
    assert response.status_code == 400

    service = await create_service(client, headers, discount_price=80)
    response = await client.put(f"/api/services/{service['id']}", json={"price": 50}, headers=headers)
    assert response.status_code == 400
    assert "Discount price" in response.json()["detail"]


@pytest.mark.asyncio
async def test_null_price_keeps_stored_price_for_discount_check(client, provider):
    _, headers = provider
    service = await create_service(client, headers)
    response = await client.put(
        f"/api/services/{service['id']}", json={"price": None, "discount_price": 500}, headers=headers
    )
    assert response.status_code == 400

    stored = (await client.get(f"/api/services/{service['id']}")).json()
    assert stored["price"] == 100.0
    assert stored["discount_price"] is None

    response = await client.put(
        f"/api/services/{service['id']}", json={"price": None, "discount_price": 90}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["price"] == 100.0
    assert response.json()["discount_price"] == 90.0


@pytest.mark.asyncio
async def test_links_are_validated_and_replaced(client, admin, provider):
    _, admin_headers = admin
    _, headers = provider
    price_id, suitability_id = await seed_lookups(client, admin_headers)

    response = await client.post(
        "/api/services/",
        json={"service_code": "S1", "service_name": "x", "price": 10, "suitability_ids": [999]},
        headers=headers,
    )
    assert response.status_code == 400
    assert "999" in response.json()["detail"]

    service = await create_service(
        client, headers, price_category_ids=[price_id], suitability_ids=[suitability_id, suitability_id]
    )
    assert service["price_category_ids"] == [price_id]
    assert service["suitability_ids"] == [suitability_id]

    response = await client.put(f"/api/services/{service['id']}", json={"suitability_ids": []}, headers=headers)
    assert response.json()["suitability_ids"] == []
    assert response.json()["price_category_ids"] == [price_id]


@pytest.mark.asyncio
async def test_only_owner_or_admin_can_change_service(client, admin, provider, other_provider):
    _, admin_headers = admin
    _, headers = provider
    _, other_headers = other_provider
    service = await create_service(client, headers)

    response = await client.put(f"/api/services/{service['id']}", json={"service_name": "Mine"}, headers=other_headers)
    assert response.status_code == 403
    assert (await client.delete(f"/api/services/{service['id']}", headers=other_headers)).status_code == 403

    response = await client.put(f"/api/services/{service['id']}", json={"status": "Inactive"}, headers=admin_headers)
    assert response.json()["status"] == "Inactive"

    assert (await client.delete(f"/api/services/{service['id']}", headers=headers)).status_code == 204
    assert (await client.get(f"/api/services/{service['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_list_services_filters(client, provider, other_provider):
    _, headers = provider
    _, other_headers = other_provider
    mine = await create_service(client, headers, code="S1")
    await create_service(client, other_headers, code="S2", status="Inactive")

    response = await client.get("/api/services/", params={"provider_id": mine["provider_id"]})
    assert [s["id"] for s in response.json()] == [mine["id"]]

    response = await client.get("/api/services/", params={"status": "Inactive"})
    assert [s["service_code"] for s in response.json()] == ["S2"]


@pytest.mark.asyncio
async def test_unknown_service_is_404(client, provider):
    _, headers = provider
    assert (await client.get("/api/services/12345")).status_code == 404
    response = await client.put("/api/services/12345", json={"service_name": "x"}, headers=headers)
    assert response.status_code == 404
