"""Tests for image uploads and the static ``/uploads`` mount."""

import pytest

from booking_platform_api.app.core.config import settings
from conftest import create_hotel, create_room, create_service

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.mark.asyncio
async def test_service_images_are_stored_and_served(client, provider):
    _, headers = provider
    service = await create_service(client, headers)
    files = [
        ("files", ("a.png", PNG, "image/png")),
        ("files", ("b.jpg", b"jpeg-bytes", "image/jpeg")),
    ]
    response = await client.post(f"/api/services/{service['id']}/images", files=files, headers=headers)
    assert response.status_code == 200, response.text
    images = response.json()["images"]
    assert len(images) == 2
    assert all(path.startswith("/uploads/") for path in images)
    assert images[0].endswith(".png")

    served = await client.get(images[0])
    assert served.status_code == 200
    assert served.content == PNG


@pytest.mark.asyncio
async def test_non_image_upload_is_rejected(client, provider):
    _, headers = provider
    service = await create_service(client, headers)
    files = [("files", ("notes.txt", b"hello", "text/plain"))]
    response = await client.post(f"/api/services/{service['id']}/images", files=files, headers=headers)
    assert response.status_code == 400
    assert "image" in response.json()["detail"]


@pytest.mark.asyncio
async def test_too_many_files(client, provider):
    _, headers = provider
    service = await create_service(client, headers)
    files = [("files", (f"{i}.gif", b"GIF89a", "image/gif")) for i in range(11)]
    response = await client.post(f"/api/services/{service['id']}/images", files=files, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_oversized_file(client, provider, monkeypatch):
    _, headers = provider
    monkeypatch.setattr(settings, "max_upload_size", 10)
    service = await create_service(client, headers)
    files = [("files", ("big.png", PNG, "image/png"))]
    response = await client.post(f"/api/services/{service['id']}/images", files=files, headers=headers)
    assert response.status_code == 400
    assert "exceeds" in response.json()["detail"]


@pytest.mark.asyncio
async def test_room_pictures_require_ownership(client, provider, other_provider):
    _, headers = provider
    _, other_headers = other_provider
    service = await create_service(client, headers)
    hotel = await create_hotel(client, headers, service["id"])
    room = await create_room(client, headers, hotel["id"])
    files = [("files", ("r.png", PNG, "image/png"))]

    response = await client.post(f"/api/rooms/{room['id']}/pictures", files=files, headers=other_headers)
    assert response.status_code == 403

    response = await client.post(f"/api/rooms/{room['id']}/pictures", files=files, headers=headers)
    assert len(response.json()["pictures"]) == 1


@pytest.mark.asyncio
async def test_coffee_picture_is_replaced(client, provider):
    _, headers = provider
    service = await create_service(client, headers)
    coffee = (
        await client.post(
            "/api/coffees/",
            json={"coffee_code": "CF1", "service_id": service["id"], "coffee_type": "Mocha", "average_price": 2},
            headers=headers,
        )
    ).json()
    first = await client.post(
        f"/api/coffees/{coffee['id']}/picture", files={"file": ("one.png", PNG, "image/png")}, headers=headers
    )
    second = await client.post(
        f"/api/coffees/{coffee['id']}/picture", files={"file": ("two.gif", b"GIF89a", "image/gif")}, headers=headers
    )
    assert first.json()["picture"] != second.json()["picture"]
    assert second.json()["picture"].endswith(".gif")
