"""Pytest configuration and fixtures."""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import app
from app.osm_client import OsmApiClient, get_osm_client

OSM_API_URL = "https://osm.test/api/0.6"

NODE_HISTORY = [
    {
        "type": "node", "id": 42, "version": 1, "timestamp": "2012-01-01T00:00:00Z",
        "changeset": 100, "user": "alice", "uid": 1, "lat": 51.5, "lon": -0.1,
    },
    {
        "type": "node", "id": 42, "version": 2, "timestamp": "2013-01-01T00:00:00Z",
        "changeset": 200, "user": "bob", "uid": 2, "lat": 51.5, "lon": -0.2,
        "tags": {"amenity": "cafe", "name": "Corner <Cafe>"},
    },
    {
        "type": "node", "id": 42, "version": 3, "timestamp": "2014-01-01T00:00:00Z",
        "changeset": 300, "user": "bob", "uid": 2, "visible": False,
    },
]

WAY_HISTORY = [
    {
        "type": "way", "id": 7, "version": 1, "timestamp": "2012-01-01T00:00:00Z",
        "changeset": 10, "user": "alice", "uid": 1, "nodes": [1, 2, 3],
        "tags": {"highway": "residential"},
    },
    {
        "type": "way", "id": 7, "version": 2, "timestamp": "2012-06-01T00:00:00Z",
        "changeset": 11, "user": "alice", "uid": 1, "nodes": [1, 2, 4],
        "tags": {"highway": "residential"},
    },
]

RELATION_HISTORY = [
    {
        "type": "relation", "id": 9, "version": 1, "timestamp": "2012-01-01T00:00:00Z",
        "changeset": 20, "user": "carol", "uid": 3,
        "members": [{"type": "way", "ref": 5, "role": "outer"}],
        "tags": {"type": "multipolygon"},
    },
    {
        "type": "relation", "id": 9, "version": 2, "timestamp": "2012-02-01T00:00:00Z",
        "changeset": 21, "user": "carol", "uid": 3,
        "members": [
            {"type": "way", "ref": 5, "role": "outer"},
            {"type": "node", "ref": 9, "role": ""},
        ],
        "tags": {"type": "multipolygon"},
    },
]

HISTORIES = {
    "/api/0.6/node/42/history.json": NODE_HISTORY,
    "/api/0.6/way/7/history.json": WAY_HISTORY,
    "/api/0.6/relation/9/history.json": RELATION_HISTORY,
}


def fake_osm_api(request: httpx.Request) -> httpx.Response:
    """Serve canned histories; 410 for node 666, 500 for node 500, else 404."""
    path = request.url.path
    if path == "/api/0.6/node/666/history.json":
        return httpx.Response(410)
    if path == "/api/0.6/node/500/history.json":
        return httpx.Response(500)
    if path in HISTORIES:
        return httpx.Response(200, json={"version": "0.6", "elements": HISTORIES[path]})
    return httpx.Response(404)


@pytest.fixture
def test_settings():
    return Settings(osm_api_url=OSM_API_URL)


@pytest.fixture
def osm_client(test_settings):
    """OSM client backed by the in-memory fake API."""
    return OsmApiClient(test_settings, transport=httpx.MockTransport(fake_osm_api))


@pytest.fixture
async def client(osm_client):
    """Async test client fixture with the fake OSM API injected."""
    app.dependency_overrides[get_osm_client] = lambda: osm_client
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
