"""Tests for the /api/fetch-metadata endpoint and the category-group helpers.

The pipeline is replaced with lightweight mocks so the tests run without
internet access.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from placelinks.main import app
from placelinks.models.metadata import PlaceMetadata

client = TestClient(app)

_PLACE = PlaceMetadata(
    title="Tsukiji Outer Market",
    image="https://places.googleapis.com/v1/places/x/photos/y/media?maxWidthPx=400&key=k",
    category="Market",
    types=["market"],
    address="Japan, 〒104-0045 Tokyo, Chuo City",
    city="Tokyo",
    rating=4.3,
    review_count=51234,
    price_level="$$",
)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Clear the slowapi in-memory counter before every test."""
    app.state.limiter._storage.reset()
    yield


def _post(payload):
    return client.post("/api/fetch-metadata", json=payload)


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------

class TestFetchMetadataValidation:
    def test_missing_url_returns_400(self):
        with patch(
            "placelinks.routers.metadata.resolve_metadata",
            new=AsyncMock(side_effect=AssertionError("pipeline must not run")),
        ):
            resp = _post({})

        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_blank_url_returns_400(self):
        resp = _post({"url": "   "})
        assert resp.status_code == 400

    def test_no_body_returns_400(self):
        resp = client.post("/api/fetch-metadata")

        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_invalid_json_returns_400(self):
        resp = client.post(
            "/api/fetch-metadata",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_non_object_body_returns_400(self):
        resp = _post(["https://example.com"])

        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_other_routes_keep_422(self):
        resp = client.post("/api/category-group", json={"types": "not-a-list"})

        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Successful responses
# ---------------------------------------------------------------------------

class TestFetchMetadataResponse:
    def test_returns_camel_case_metadata(self):
        with patch(
            "placelinks.routers.metadata.resolve_metadata", new=AsyncMock(return_value=_PLACE)
        ) as resolve:
            resp = _post({"url": "https://maps.app.goo.gl/AbCdEf123"})

        resolve.assert_awaited_once_with("https://maps.app.goo.gl/AbCdEf123")
        assert resp.status_code == 200
        data = resp.json()
        assert data["title"] == "Tsukiji Outer Market"
        assert data["reviewCount"] == 51234
        assert data["priceLevel"] == "$$"
        assert data["city"] == "Tokyo"

    def test_response_contains_all_fields(self):
        with patch(
            "placelinks.routers.metadata.resolve_metadata",
            new=AsyncMock(return_value=PlaceMetadata.title_only("https://example.com")),
        ):
            resp = _post({"url": "https://example.com"})

        data = resp.json()
        for field in (
            "title", "description", "image", "category", "types",
            "address", "city", "rating", "reviewCount", "priceLevel",
        ):
            assert field in data, f"Missing field: {field}"
        assert data["image"] is None
        assert data["types"] == []

    def test_url_is_stripped(self):
        resolve = AsyncMock(return_value=PlaceMetadata.title_only("https://example.com"))
        with patch("placelinks.routers.metadata.resolve_metadata", new=resolve):
            _post({"url": "  https://example.com  "})

        resolve.assert_awaited_once_with("https://example.com")


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------

class TestFetchMetadataErrors:
    def test_unexpected_error_returns_500(self):
        failing_client = TestClient(app, raise_server_exceptions=False)
        with patch(
            "placelinks.routers.metadata.resolve_metadata",
            new=AsyncMock(side_effect=KeyError("boom")),
        ):
            resp = failing_client.post("/api/fetch-metadata", json={"url": "https://example.com"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch metadata"}

    def test_rate_limit_returns_429(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT", "2/minute")
        from placelinks.config import get_settings

        get_settings.cache_clear()
        with patch(
            "placelinks.routers.metadata.resolve_metadata",
            new=AsyncMock(return_value=PlaceMetadata.title_only("https://example.com")),
        ):
            statuses = [_post({"url": "https://example.com"}).status_code for _ in range(3)]

        assert statuses == [200, 200, 429]


# ---------------------------------------------------------------------------
# Category groups
# ---------------------------------------------------------------------------

class TestCategoryGroups:
    def test_list_groups(self):
        resp = client.get("/api/category-groups")

        assert resp.status_code == 200
        groups = resp.json()
        assert list(groups) == ["Food", "Hotels", "Attractions", "Shopping", "Transport"]
        assert "ramen_restaurant" in groups["Food"]

    def test_group_for_place(self):
        resp = client.post("/api/category-group", json={"types": ["lodging"], "category": "Hotel"})

        assert resp.json() == {"group": "Hotels"}

    def test_group_fallback_to_other(self):
        resp = client.post("/api/category-group", json={})

        assert resp.json() == {"group": "Other"}


def test_health_check():
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
