"""Tests for the HTTP surface (FastAPI TestClient)."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.coins.builder import SnapshotBuilder
from app.coins.config import CoinSettings
from app.coins.errors import UpstreamError
from app.coins.models import serialize_snapshot
from app.coins.service import CoinService
from app.main import create_app

from fakes import FakeCacheStore, FakeUpstream

KEY = "coins:snapshot"


def _service(upstream, cache) -> CoinService:
    builder = SnapshotBuilder(upstream, cache, KEY, ttl_seconds=600, page_count=4, page_size=3)
    return CoinService(upstream=upstream, cache=cache, builder=builder, scheduler=None, cache_key=KEY)


@pytest.fixture
def client(records):
    cache = FakeCacheStore()
    cache.store[KEY] = serialize_snapshot(records)
    app = create_app(CoinSettings(), service=_service(FakeUpstream(records), cache))
    with TestClient(app) as c:
        yield c


class TestRoutes:
    """HTTP contract tests."""

    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "message" in response.json()

    def test_coins_defaults(self, client, records):
        """Test that missing params default to page=1, item=10."""
        response = client.get("/coins")
        assert response.status_code == 200
        body = response.json()
        assert body == {
            "totalItems": 12,
            "totalPages": 2,
            "currentPage": 1,
            "perPage": 10,
            "coins": records[0:10],
        }

    def test_coins_second_page(self, client, records):
        body = client.get("/coins", params={"page": 2, "item": 10}).json()
        assert body["coins"] == records[10:12]
        assert body["currentPage"] == 2

    def test_invalid_params_normalized_not_rejected(self, client):
        """Test that junk query values are normalized instead of 422."""
        response = client.get("/coins", params={"page": "abc", "item": "-3"})
        assert response.status_code == 200
        body = response.json()
        assert body["currentPage"] == 1
        assert body["perPage"] == 10

    def test_upstream_failure_returns_500_without_detail(self, records):
        """Test that core failures surface as a generic 500."""
        upstream = FakeUpstream(records, fail_pages={1})
        app = create_app(CoinSettings(), service=_service(upstream, FakeCacheStore()))
        with TestClient(app) as c:
            response = c.get("/coins")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch data"}
        assert "boom" not in response.text

    def test_lifespan_starts_and_stops_service(self):
        """Test that the app lifespan drives the service lifecycle."""
        service = _service(FakeUpstream([]), FakeCacheStore())
        service.start = AsyncMock()
        service.stop = AsyncMock()
        app = create_app(CoinSettings(), service=service)
        with TestClient(app):
            service.start.assert_awaited_once()
        service.stop.assert_awaited_once()

    def test_cors_header(self, client):
        response = client.get("/", headers={"Origin": "http://example.com"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_upstream_error_type_is_hidden(self):
        """Test that the error body never includes the exception text."""
        err = UpstreamError(3, "secret upstream payload")
        assert "secret" in str(err)
        service = _service(FakeUpstream([]), FakeCacheStore())
        service.get_page = AsyncMock(side_effect=err)
        with TestClient(create_app(CoinSettings(), service=service)) as c:
            response = c.get("/coins")
        assert response.status_code == 500
        assert "secret" not in response.text

    def test_security_headers(self, client):
        """Test that responses carry the hardening headers."""
        response = client.get("/coins")
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "SAMEORIGIN"
        assert response.headers["strict-transport-security"] == "max-age=31536000; includeSubDomains"
        assert response.headers["referrer-policy"] == "no-referrer"
        assert "default-src 'self'" in response.headers["content-security-policy"]

    def test_security_headers_on_error_response(self, records):
        """Test that a failed /coins request still carries the hardening headers."""
        app = create_app(CoinSettings(), service=_service(FakeUpstream(records, fail_pages={1}), FakeCacheStore()))
        with TestClient(app) as c:
            response = c.get("/coins")
        assert response.status_code == 500
        assert response.headers["x-content-type-options"] == "nosniff"
