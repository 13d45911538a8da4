"""Tests for hotels, rooms and the hotel search."""

import pytest

from conftest import create_hotel, create_room, create_service


@pytest.mark.asyncio
async def test_hotel_and_room_crud(client, provider):
    _, headers = provider
    service = await create_service(client, headers)
    hotel = await create_hotel(client, headers, service["id"])
    room = await create_room(client, headers, hotel["id"], discount_price=60)
    assert room["capacity"] == {"adults": 2, "children": 1}
    assert room["available_date"] == "2030-01-01"

    response = await client.put(f"/api/rooms/{room['id']}", json={"available_rooms": 0}, headers=headers)
    assert response.json()["available_rooms"] == 0

    rooms = (await client.get("/api/rooms/", params={"hotel_id": hotel["id"]})).json()
    assert [r["id"] for r in rooms] == [room["id"]]

    # Deleting the hotel removes its rooms.
    assert (await client.delete(f"/api/hotels/{hotel['id']}", headers=headers)).status_code == 204
    assert (await client.get(f"/api/rooms/{room['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_room_discount_is_checked_against_stored_price(client, provider):
    _, headers = provider
    service = await create_service(client, headers)
    hotel = await create_hotel(client, headers, service["id"])
    room = await create_room(client, headers, hotel["id"])

    response = await client.put(f"/api/rooms/{room['id']}", json={"discount_price": 80}, headers=headers)
    assert response.status_code == 400

    response = await client.put(
        f"/api/rooms/{room['id']}", json={"price": None, "discount_price": 500}, headers=headers
    )
    assert response.status_code == 400

    response = await client.put(f"/api/rooms/{room['id']}", json={"discount_price": 70}, headers=headers)
    assert response.status_code == 200
    assert response.json()["price"] == 80.0
    assert response.json()["discount_price"] == 70.0


@pytest.mark.asyncio
async def test_room_for_missing_hotel_is_bad_request(client, provider):
    _, headers = provider
    payload = {
        "room_code": "R1",
        "hotel_id": 999,
        "room_type": "Deluxe",
        "available_rooms": 1,
        "available_date": "2030-01-01",
        "price": 10,
        "capacity": {"adults": 1, "children": 0},
    }
    response = await client.post("/api/rooms/", json=payload, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_room_validation(client, provider):
    _, headers = provider
    service = await create_service(client, headers)
    hotel = await create_hotel(client, headers, service["id"])
    payload = {
        "room_code": "R1",
        "hotel_id": hotel["id"],
        "room_type": "Deluxe",
        "available_rooms": 1,
        "available_date": "2030-01-01",
        "price": 10,
        "capacity": {"adults": 0, "children": 0},
    }
    response = await client.post("/api/rooms/", json=payload, headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "capacity.adults"


@pytest.mark.asyncio
async def test_star_rating_range(client, provider):
    _, headers = provider
    service = await create_service(client, headers)
    response = await client.post(
        "/api/hotels/",
        json={"hotel_code": "H1", "service_id": service["id"], "star_rating": 6, "room_capacity": 1},
        headers=headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_other_provider_cannot_touch_rooms(client, provider, other_provider):
    _, headers = provider
    _, other_headers = other_provider
    service = await create_service(client, headers)
    hotel = await create_hotel(client, headers, service["id"])
    room = await create_room(client, headers, hotel["id"])

    assert (await client.put(f"/api/rooms/{room['id']}", json={"price": 1}, headers=other_headers)).status_code == 403
    response = await client.post(
        "/api/rooms/",
        json={
            "room_code": "R2",
            "hotel_id": hotel["id"],
            "room_type": "Suite",
            "available_rooms": 1,
            "available_date": "2030-01-01",
            "price": 10,
            "capacity": {"adults": 1, "children": 0},
        },
        headers=other_headers,
    )
    assert response.status_code == 403
    response = await client.post(
        "/api/hotels/",
        json={"hotel_code": "H2", "service_id": service["id"], "star_rating": 3, "room_capacity": 1},
        headers=other_headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_hotel_details(client, admin, provider):
    _, admin_headers = admin
    _, headers = provider
    hotel_type = (await client.post("/api/hotel-types/", json={"type": "Khách sạn"}, headers=admin_headers)).json()
    location = (
        await client.post(
            "/api/locations/",
            json={"location_code": "L1", "location_name": "Hue", "description": "Old capital",
                  "latitude": 16.46, "longitude": 107.59},
            headers=headers,
        )
    ).json()
    service = await create_service(client, headers, location_id=location["id"])
    await create_hotel(client, headers, service["id"], code="HT9", hotel_type_id=hotel_type["id"])

    response = await client.get("/api/hotels/details/HT9")
    assert response.status_code == 200
    detail = response.json()
    assert detail["hotel_type"] == "Khách sạn"
    assert detail["service"]["id"] == service["id"]
    assert detail["location"]["location_name"] == "Hue"

    assert len((await client.get("/api/hotels/details")).json()) == 1
    assert (await client.get("/api/hotels/details/NOPE")).status_code == 404


@pytest.mark.asyncio
async def test_hotel_filter(client, admin, provider):
    _, admin_headers = admin
    _, headers = provider
    family = (
        await client.post("/api/suitabilities/", json={"suitability_code": "SU1", "name": "Family"},
                          headers=admin_headers)
    ).json()
    wifi = (
        await client.post("/api/facilities/", json={"facility_code": "F1", "name": "Wifi", "service_type": "Room"},
                          headers=admin_headers)
    ).json()

    family_service = await create_service(client, headers, code="S1", suitability_ids=[family["id"]])
    plain_service = await create_service(client, headers, code="S2")
    family_hotel = await create_hotel(client, headers, family_service["id"], code="H1")
    plain_hotel = await create_hotel(client, headers, plain_service["id"], code="H2")
    wifi_room = await create_room(client, headers, family_hotel["id"], code="R1", facility_ids=[wifi["id"]])
    await create_room(client, headers, family_hotel["id"], code="R2")
    await create_room(client, headers, plain_hotel["id"], code="R3")
    await create_hotel(client, headers, plain_service["id"], code="H3")

    # Hotels without rooms never match.
    everything = (await client.get("/api/hotels/filter")).json()
    assert sorted(h["hotel_code"] for h in everything) == ["H1", "H2"]

    by_suitability = (await client.get("/api/hotels/filter", params={"suitabilities": str(family["id"])})).json()
    assert [h["hotel_code"] for h in by_suitability] == ["H1"]
    assert len(by_suitability[0]["rooms"]) == 2

    by_facility = (await client.get("/api/hotels/filter", params={"facilities": str(wifi["id"])})).json()
    assert [h["hotel_code"] for h in by_facility] == ["H1"]
    assert [r["id"] for r in by_facility[0]["rooms"]] == [wifi_room["id"]]

    response = await client.get("/api/hotels/filter", params={"facilities": "1,abc"})
    assert response.status_code == 400
