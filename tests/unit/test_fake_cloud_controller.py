"""Tests for the fake Cloud Controller used by the client tests."""

import httpx
import pytest

from cf_admin_client.testing import (
    FakeCloudController,
    UnexpectedRequestError,
    create_envelope,
    create_error_response,
)


@pytest.fixture
def fake():
    return FakeCloudController("https://example.com/api")


@pytest.mark.unit
async def test_matches_query_regardless_of_order(fake):
    fake.add("DELETE", "/v2/organizations/o1?recursive=true&async=false", status_code=204)

    async with httpx.AsyncClient(transport=fake.transport) as client:
        response = await client.delete(
            "https://example.com/api/v2/organizations/o1", params={"async": "false", "recursive": "true"}
        )

    assert response.status_code == 204
    assert fake.call_count("DELETE", "/v2/organizations/o1?async=false&recursive=true") == 1


@pytest.mark.unit
async def test_unknown_route_raises(fake):
    async with httpx.AsyncClient(transport=fake.transport) as client:
        with pytest.raises(UnexpectedRequestError, match="GET https://example.com/api/v2/apps"):
            await client.get("https://example.com/api/v2/apps")


@pytest.mark.unit
async def test_times_limits_responses(fake):
    fake.add("GET", "/v2/info", json={"version": 2}, times=1)

    async with httpx.AsyncClient(transport=fake.transport) as client:
        await client.get("https://example.com/api/v2/info")
        with pytest.raises(UnexpectedRequestError):
            await client.get("https://example.com/api/v2/info")


@pytest.mark.unit
async def test_absolute_urls_for_other_hosts(fake):
    fake.add("POST", "https://uaa.example.com/oauth/token", json={"access_token": "t"})

    async with httpx.AsyncClient(transport=fake.transport) as client:
        response = await client.post("https://uaa.example.com/oauth/token")

    assert response.json() == {"access_token": "t"}


@pytest.mark.unit
def test_create_envelope():
    envelope = create_envelope(["a"], next_url="/v2/x?page=2")

    assert envelope["resources"] == ["a"]
    assert envelope["next_url"] == "/v2/x?page=2"


@pytest.mark.unit
def test_create_error_response():
    assert create_error_response(404, error="FAKE_404").json() == {"error": "FAKE_404"}
    assert create_error_response(500, text="FAKE_500").text == "FAKE_500"
