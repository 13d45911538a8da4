"""Tests for the error response format."""

import pytest

from booking_platform_api.app.core.errors import ConflictError, NotFoundError, PermissionDeniedError, http_error

from conftest import user_payload


def test_service_errors_map_to_status_codes():
    assert http_error(NotFoundError("gone")).status_code == 404
    assert http_error(PermissionDeniedError("no")).status_code == 403
    assert http_error(ConflictError("dup")).status_code == 400
    assert http_error(ValueError("bad")).status_code == 400
    assert http_error(ValueError("bad")).detail == "bad"


@pytest.mark.asyncio
async def test_validation_errors_are_400_with_field_list(client):
    response = await client.post(
        "/api/auth/register",
        json={"user_code": "U1", "email": "not-an-email", "birth_date": "1990-01-01"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation error"
    fields = {error["field"] for error in body["errors"]}
    assert {"email", "full_name", "password"} <= fields
    assert all(error["message"] for error in body["errors"])


@pytest.mark.asyncio
async def test_query_validation_errors(client, admin):
    _, headers = admin
    response = await client.get("/api/users/", params={"limit": 0}, headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "limit"


@pytest.mark.asyncio
async def test_unknown_route(client):
    assert (await client.get("/api/nothing-here")).status_code == 404


@pytest.mark.asyncio
async def test_malformed_email_is_rejected(client):
    response = await client.post(
        "/api/auth/register", json=user_payload("BAD1", email="bad..dots@example.com")
    )
    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == ["email"]
