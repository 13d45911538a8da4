"""Tests for lookup tables, locations and the filter option routes."""

import pytest


@pytest.mark.asyncio
async def test_lookup_crud(client, admin):
    _, headers = admin
    response = await client.post(
        "/api/suitabilities/", json={"suitability_code": "SU1", "name": "Family"}, headers=headers
    )
    assert response.status_code == 201
    record = response.json()

    response = await client.put(f"/api/suitabilities/{record['id']}", json={"name": "Families"}, headers=headers)
    assert response.json()["name"] == "Families"

    listing = (await client.get("/api/suitabilities/")).json()
    assert [r["suitability_code"] for r in listing] == ["SU1"]

    assert (await client.delete(f"/api/suitabilities/{record['id']}", headers=headers)).status_code == 204
    assert (await client.get(f"/api/suitabilities/{record['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_lookup_writes_require_admin(client, provider):
    _, headers = provider
    response = await client.post("/api/dish-types/", json={"name": "Seafood"}, headers=headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_duplicate_lookup_code(client, admin):
    _, headers = admin
    payload = {"price_category_code": "PC1", "cheap": 10, "mid_range": 50, "luxury": 200}
    assert (await client.post("/api/price-categories/", json=payload, headers=headers)).status_code == 201
    response = await client.post("/api/price-categories/", json=payload, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Price category with this price_category_code already exists"


@pytest.mark.asyncio
async def test_hotel_type_must_be_known(client, admin):
    _, headers = admin
    response = await client.post("/api/hotel-types/", json={"type": "Castle"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "type"

    response = await client.post("/api/hotel-types/", json={"type": "Homestay"}, headers=headers)
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_facilities_by_service_type(client, admin):
    _, headers = admin
    await client.post(
        "/api/facilities/", json={"facility_code": "F1", "name": "Air conditioning", "service_type": "Room"},
        headers=headers,
    )
    await client.post(
        "/api/facilities/", json={"facility_code": "F2", "name": "Window seat", "service_type": "Table"},
        headers=headers,
    )
    response = await client.get("/api/facilities/service-type/Room")
    assert response.status_code == 200
    assert [f["facility_code"] for f in response.json()] == ["F1"]
    assert (await client.get("/api/facilities/service-type/Garage")).status_code == 400


@pytest.mark.asyncio
async def test_restaurant_filter_options(client, admin):
    _, headers = admin
    await client.post("/api/cuisine-types/", json={"type": "Vietnamese"}, headers=headers)
    await client.post("/api/cuisine-types/", json={"type": "Italian"}, headers=headers)
    await client.post("/api/dish-types/", json={"name": "Noodles"}, headers=headers)
    await client.post("/api/restaurant-types/", json={"type": "Quick Bites"}, headers=headers)
    await client.post("/api/coffee-types/", json={"name": "Espresso"}, headers=headers)

    options = (await client.get("/api/restaurant-filters/filter")).json()
    assert [c["type"] for c in options["cuisine_types"]] == ["Italian", "Vietnamese"]
    assert [d["name"] for d in options["dish_types"]] == ["Noodles"]
    assert [r["type"] for r in options["restaurant_types"]] == ["Quick Bites"]

    coffees = (await client.get("/api/restaurant-filters/coffee")).json()
    assert [c["name"] for c in coffees] == ["Espresso"]


@pytest.mark.asyncio
async def test_provider_can_create_location(client, provider):
    _, headers = provider
    payload = {
        "location_code": "LOC1",
        "location_name": "Da Nang",
        "description": "Beach city",
        "latitude": 16.05,
        "longitude": 108.2,
    }
    response = await client.post("/api/locations/", json=payload, headers=headers)
    assert response.status_code == 201

    response = await client.post("/api/locations/", json={**payload, "location_code": "LOC2", "latitude": 91},
                                 headers=headers)
    assert response.status_code == 400
