"""Tests for reviews and their attachment to services."""

import pytest

from conftest import create_hotel, create_room, create_service


async def reviewed_room(client, headers):
    service = await create_service(client, headers)
    hotel = await create_hotel(client, headers, service["id"])
    room = await create_room(client, headers, hotel["id"])
    return service, room


async def post_review(client, headers, room_id, service_id=None, code="RV1", **fields):
    payload = {
        "review_code": code,
        "positive_comment": "Great view",
        "negative_comment": "",
        "stars": 5,
        "target_id": room_id,
        "target_model": "Room",
        "service_id": service_id,
    }
    payload.update(fields)
    return await client.post("/api/reviews/", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_review_is_attached_to_service_and_detached_on_delete(client, provider, customer):
    _, provider_headers = provider
    user, headers = customer
    service, room = await reviewed_room(client, provider_headers)

    response = await post_review(client, headers, room["id"], service_id=service["id"])
    assert response.status_code == 201
    review = response.json()
    assert review["user_id"] == user["id"]

    assert (await client.get(f"/api/services/{service['id']}")).json()["review_ids"] == [review["id"]]

    assert (await client.delete(f"/api/reviews/{review['id']}", headers=headers)).status_code == 204
    assert (await client.get(f"/api/services/{service['id']}")).json()["review_ids"] == []


@pytest.mark.asyncio
async def test_review_target_must_exist(client, provider, customer):
    _, provider_headers = provider
    _, headers = customer
    service, room = await reviewed_room(client, provider_headers)

    response = await post_review(client, headers, 999)
    assert response.status_code == 400
    assert response.json()["detail"] == "Room 999 not found"

    response = await post_review(client, headers, room["id"], target_model="Table")
    assert response.status_code == 400

    response = await post_review(client, headers, room["id"], service_id=555)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_review_validation(client, provider, customer):
    _, provider_headers = provider
    _, headers = customer
    _, room = await reviewed_room(client, provider_headers)

    assert (await post_review(client, headers, room["id"], stars=0)).status_code == 400
    assert (await post_review(client, headers, room["id"], stars=6)).status_code == 400
    assert (await post_review(client, headers, room["id"], positive_comment="x" * 1001)).status_code == 400
    assert (await post_review(client, headers, room["id"], target_model="Hotel")).status_code == 400


@pytest.mark.asyncio
async def test_comments_are_trimmed_and_escaped(client, provider, customer):
    _, provider_headers = provider
    _, headers = customer
    _, room = await reviewed_room(client, provider_headers)

    response = await post_review(client, headers, room["id"], positive_comment="  <b>nice</b>  ")
    assert response.json()["positive_comment"] == "&lt;b&gt;nice&lt;/b&gt;"


@pytest.mark.asyncio
async def test_only_author_or_admin_edits(client, admin, provider, customer):
    _, admin_headers = admin
    _, provider_headers = provider
    _, headers = customer
    _, room = await reviewed_room(client, provider_headers)
    review = (await post_review(client, headers, room["id"])).json()

    response = await client.put(f"/api/reviews/{review['id']}", json={"stars": 1}, headers=provider_headers)
    assert response.status_code == 403

    response = await client.put(f"/api/reviews/{review['id']}", json={"stars": 3}, headers=headers)
    assert response.json()["stars"] == 3

    assert (await client.delete(f"/api/reviews/{review['id']}", headers=admin_headers)).status_code == 204


@pytest.mark.asyncio
async def test_listing_is_public_and_filtered(client, provider, customer):
    _, provider_headers = provider
    _, headers = customer
    service, room = await reviewed_room(client, provider_headers)
    await post_review(client, headers, room["id"], service_id=service["id"], code="RV1")
    await post_review(client, headers, room["id"], code="RV2")

    everything = (await client.get("/api/reviews/", params={"target_model": "Room", "target_id": room["id"]})).json()
    assert len(everything) == 2

    for_service = (await client.get("/api/reviews/", params={"service_id": service["id"]})).json()
    assert [r["review_code"] for r in for_service] == ["RV1"]

    assert (await client.post("/api/reviews/", json={})).status_code in (400, 401)
