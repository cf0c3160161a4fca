"""Basic API smoke tests — health, empty catalog."""

import pytest


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"


@pytest.mark.asyncio
async def test_cves_list_empty(client):
    r = await client.get("/api/v1/cves")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    body = r.json()
    assert body["data"] == []
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 0,
        "totalCount": 0,
        "hasNextPage": False,
        "hasPrevPage": False,
    }
