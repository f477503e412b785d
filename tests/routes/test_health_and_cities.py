"""
Tests for GET /health and GET /api/cities/trending.
"""

import pytest
from fastapi.testclient import TestClient

from spots_backend.main import app
from spots_backend.services.trending_service import (
    DEFAULT_TRENDING_CITIES,
    InMemoryTrendingStore,
    TrendingCityCache,
    get_trending_cache,
)


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def empty_cache():
    cache = TrendingCityCache(store=InMemoryTrendingStore())
    app.dependency_overrides[get_trending_cache] = lambda: cache

    yield cache

    app.dependency_overrides.clear()


def test_health_reports_degraded_mode(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "mode": "degraded"}


def test_health_reports_live_mode(client, live_mode):
    response = client.get("/health")

    assert response.json()["mode"] == "live"


def test_trending_defaults_before_first_refresh(client, empty_cache):
    response = client.get("/api/cities/trending")

    assert response.status_code == 200
    cities = response.json()["cities"]
    assert [city["name"] for city in cities] == list(DEFAULT_TRENDING_CITIES[:5])
    assert cities[0]["id"] == "los-angeles"
    assert cities[0]["coordinates"] == [-118.2437, 34.0522]


def test_trending_limit_bounds(client, empty_cache):
    assert client.get("/api/cities/trending", params={"limit": 0}).status_code == 400
    assert client.get("/api/cities/trending", params={"limit": 51}).status_code == 400


def test_invalid_limit_uses_error_envelope(client, empty_cache):
    response = client.get("/api/cities/trending", params={"limit": "lots"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
