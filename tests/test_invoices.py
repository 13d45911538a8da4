"""Tests for invoices, the order listings and revenue reports."""

import pytest

from conftest import create_hotel, create_room, create_service


async def booking_setup(client, headers):
    service = await create_service(client, headers)
    hotel = await create_hotel(client, headers, service["id"])
    deluxe = await create_room(client, headers, hotel["id"], code="R1", room_type="Deluxe")
    suite = await create_room(client, headers, hotel["id"], code="R2", room_type="Suite")
    return service, deluxe, suite


async def create_invoice(client, headers, service_id, code="INV1", **fields):
    payload = {
        "invoice_code": code,
        "service_id": service_id,
        "quantity": 1,
        "total_amount": 100,
        "check_in_date": "2025-03-10",
        "check_out_date": "2025-03-12",
    }
    payload.update(fields)
    response = await client.post("/api/invoices/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_customer_books_a_room(client, provider, customer):
    _, provider_headers = provider
    user, headers = customer
    service, deluxe, _ = await booking_setup(client, provider_headers)

    invoice = await create_invoice(client, headers, service["id"], room_id=deluxe["id"])
    assert invoice["user_id"] == user["id"]
    assert invoice["status"] == "pending"
    assert invoice["payment_status"] == "unpaid"

    # The provider owning the booked service may read it too.
    assert (await client.get(f"/api/invoices/{invoice['id']}", headers=provider_headers)).status_code == 200


@pytest.mark.asyncio
async def test_invoice_access(client, admin, provider, customer):
    _, admin_headers = admin
    _, provider_headers = provider
    _, headers = customer
    service, _, _ = await booking_setup(client, provider_headers)
    invoice = await create_invoice(client, headers, service["id"])

    stranger = await client.post(
        "/api/auth/register",
        json={
            "user_code": "STR",
            "full_name": "Stranger",
            "phone_number": "1",
            "email": "stranger@example.com",
            "user_name": "stranger",
            "birth_date": "1990-01-01",
            "password": "secret123",
        },
    )
    assert stranger.status_code == 201
    login = await client.post("/api/auth/login", json={"email": "stranger@example.com", "password": "secret123"})
    stranger_headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    assert (await client.get(f"/api/invoices/{invoice['id']}", headers=stranger_headers)).status_code == 403
    assert (await client.delete(f"/api/invoices/{invoice['id']}", headers=stranger_headers)).status_code == 403
    assert (await client.get("/api/invoices/", headers=stranger_headers)).json() == []
    assert len((await client.get("/api/invoices/", headers=admin_headers)).json()) == 1


@pytest.mark.asyncio
async def test_customer_cannot_invoice_someone_else(client, admin, provider, customer):
    admin_user, _ = admin
    _, provider_headers = provider
    _, headers = customer
    service, _, _ = await booking_setup(client, provider_headers)
    response = await client.post(
        "/api/invoices/",
        json={
            "invoice_code": "INV1",
            "user_id": admin_user["id"],
            "service_id": service["id"],
            "quantity": 1,
            "total_amount": 10,
            "check_in_date": "2025-03-10",
            "check_out_date": "2025-03-12",
        },
        headers=headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_invoice_references_and_dates(client, provider, customer):
    _, provider_headers = provider
    _, headers = customer
    service, _, _ = await booking_setup(client, provider_headers)
    base = {
        "invoice_code": "INV1",
        "service_id": service["id"],
        "quantity": 1,
        "total_amount": 10,
        "check_in_date": "2025-03-10",
        "check_out_date": "2025-03-12",
    }
    response = await client.post("/api/invoices/", json={**base, "room_id": 999}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Room 999 not found"

    response = await client.post("/api/invoices/", json={**base, "check_out_date": "2025-03-10"}, headers=headers)
    assert response.status_code == 400

    invoice = await create_invoice(client, headers, service["id"])
    response = await client.put(
        f"/api/invoices/{invoice['id']}", json={"check_out_date": "2025-03-01"}, headers=headers
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_status_update_has_no_transition_rules(client, provider, customer):
    _, provider_headers = provider
    _, headers = customer
    service, _, _ = await booking_setup(client, provider_headers)
    invoice = await create_invoice(client, headers, service["id"])

    for status in ("used", "pending", "cancelled", "confirmed"):
        response = await client.put(f"/api/invoices/{invoice['id']}/status", json={"status": status}, headers=headers)
        assert response.status_code == 200
        assert response.json()["status"] == status

    response = await client.put(f"/api/invoices/{invoice['id']}/status", json={"status": "lost"}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_room_must_belong_to_booked_service(client, provider, other_provider, customer):
    _, provider_headers = provider
    _, other_headers = other_provider
    _, headers = customer
    service, deluxe, _ = await booking_setup(client, provider_headers)
    other_service = await create_service(client, other_headers, code="SRV2")
    other_hotel = await create_hotel(client, other_headers, other_service["id"], code="HT2")
    other_room = await create_room(client, other_headers, other_hotel["id"], code="R9")

    response = await client.post(
        "/api/invoices/",
        json={
            "invoice_code": "INV1",
            "service_id": service["id"],
            "room_id": other_room["id"],
            "quantity": 1,
            "total_amount": 10,
            "check_in_date": "2025-03-10",
            "check_out_date": "2025-03-12",
        },
        headers=headers,
    )
    assert response.status_code == 400
    assert "does not belong" in response.json()["detail"]

    invoice = await create_invoice(client, headers, service["id"], room_id=deluxe["id"])
    response = await client.put(
        f"/api/invoices/{invoice['id']}", json={"room_id": other_room["id"]}, headers=headers
    )
    assert response.status_code == 400
    assert (await client.get(f"/api/invoices/{invoice['id']}", headers=headers)).json()["room_id"] == deluxe["id"]


@pytest.mark.asyncio
async def test_user_and_provider_listings(client, admin, provider, other_provider, customer):
    _, admin_headers = admin
    provider_user, provider_headers = provider
    _, other_headers = other_provider
    user, headers = customer
    service, deluxe, _ = await booking_setup(client, provider_headers)
    await create_invoice(client, headers, service["id"], room_id=deluxe["id"])

    mine = (await client.get(f"/api/invoices/user/{user['id']}", headers=headers)).json()
    assert mine[0]["service"]["id"] == service["id"]
    assert mine[0]["room"]["room_type"] == "Deluxe"
    assert mine[0]["user"]["email"] == user["email"]

    received = (await client.get(f"/api/invoices/provider/{provider_user['id']}", headers=provider_headers)).json()
    assert received[0]["provider"]["id"] == service["provider_id"]

    response = await client.get(f"/api/invoices/provider/{provider_user['id']}", headers=other_headers)
    assert response.status_code == 403

    orders = await client.get("/api/invoices/orders", headers=admin_headers)
    assert len(orders.json()) == 1
    assert (await client.get("/api/invoices/orders", headers=headers)).status_code == 403


@pytest.mark.asyncio
async def test_monthly_revenue_by_room_type(client, provider, customer):
    provider_user, provider_headers = provider
    _, headers = customer
    service, deluxe, suite = await booking_setup(client, provider_headers)
    await create_room(client, provider_headers, deluxe["hotel_id"], code="R3", room_type="Single")

    await create_invoice(client, headers, service["id"], code="I1", room_id=deluxe["id"], total_amount=100,
                         payment_status="paid", issue_date="2025-03-05T10:00:00Z")
    await create_invoice(client, headers, service["id"], code="I2", room_id=deluxe["id"], total_amount=50,
                         payment_status="paid", issue_date="2025-03-31T23:00:00Z")
    # Unpaid and out-of-window invoices do not count.
    await create_invoice(client, headers, service["id"], code="I3", room_id=suite["id"], total_amount=70,
                         payment_status="unpaid", issue_date="2025-03-06T10:00:00Z")
    await create_invoice(client, headers, service["id"], code="I4", room_id=suite["id"], total_amount=80,
                         payment_status="paid", issue_date="2025-04-01T00:00:00Z")

    response = await client.get(
        "/api/invoices/revenue",
        params={"user_id": provider_user["id"], "month": 3, "year": 2025},
        headers=provider_headers,
    )
    assert response.status_code == 200
    revenue = {item["room_type"]: item["revenue"] for item in response.json()["data"]}
    assert revenue == {"Deluxe": 150, "Suite": 0, "Single": 0}

    yearly = await client.get(
        "/api/invoices/revenue/yearly", params={"user_id": provider_user["id"], "year": 2025},
        headers=provider_headers,
    )
    revenue = {item["room_type"]: item["revenue"] for item in yearly.json()["data"]}
    assert revenue == {"Deluxe": 150, "Suite": 80, "Single": 0}


@pytest.mark.asyncio
async def test_issue_date_is_normalised_to_utc(client, provider, customer):
    provider_user, provider_headers = provider
    _, headers = customer
    service, deluxe, _ = await booking_setup(client, provider_headers)
    # 01:00 on April 1st in UTC+7 is still March in UTC.
    await create_invoice(client, headers, service["id"], room_id=deluxe["id"], total_amount=40,
                         payment_status="paid", issue_date="2025-04-01T01:00:00+07:00")
    response = await client.get(
        "/api/invoices/revenue",
        params={"user_id": provider_user["id"], "month": 3, "year": 2025},
        headers=provider_headers,
    )
    assert response.json()["data"][0] == {"room_type": "Deluxe", "revenue": 40}


@pytest.mark.asyncio
async def test_revenue_errors(client, admin, provider):
    _, admin_headers = admin
    provider_user, provider_headers = provider
    response = await client.get(
        "/api/invoices/revenue", params={"user_id": provider_user["id"], "month": 13}, headers=provider_headers
    )
    assert response.status_code == 400

    response = await client.get("/api/invoices/revenue", params={"user_id": 999, "month": 1}, headers=admin_headers)
    assert response.status_code == 400

    response = await client.get(
        "/api/invoices/revenue/yearly", params={"user_id": provider_user["id"]}, headers=provider_headers
    )
    assert response.json() == {"data": []}

    response = await client.get(
        "/api/invoices/revenue/yearly", params={"user_id": provider_user["id"], "year": 0}, headers=provider_headers
    )
    assert response.status_code == 400

    response = await client.get(
        "/api/invoices/revenue",
        params={"user_id": provider_user["id"], "month": 1, "year": 0},
        headers=provider_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_invoice_pictures_and_delete(client, provider, customer):
    _, provider_headers = provider
    _, headers = customer
    service, _, _ = await booking_setup(client, provider_headers)
    invoice = await create_invoice(client, headers, service["id"])
    response = await client.post(
        f"/api/invoices/{invoice['id']}/pictures",
        files=[("files", ("receipt.png", b"\x89PNG", "image/png"))],
        headers=headers,
    )
    assert len(response.json()["pictures"]) == 1

    assert (await client.delete(f"/api/invoices/{invoice['id']}", headers=headers)).status_code == 204
    assert (await client.get(f"/api/invoices/{invoice['id']}", headers=headers)).status_code == 404
