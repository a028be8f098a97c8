"""
==============================================================================
API Integration Tests
==============================================================================

Tests for the catalog REST endpoints.

==============================================================================
"""

from fastapi.testclient import TestClient

from product_catalog.catalog.catalog import ProductCatalog
from product_catalog.core.dependencies import require_catalog
from product_catalog.main import app

from tests.conftest import StaticFeed, make_record


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check always reports SERVING."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "SERVING"}

    def test_health_watch_unimplemented(self, client: TestClient):
        """Test streaming watch is rejected."""
        response = client.get("/api/v1/health/watch")
        assert response.status_code == 501
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "UNIMPLEMENTED"


class TestProductEndpoints:
    """Tests for ListProducts, GetProduct and SearchProducts."""

    def test_list_products(self, client: TestClient):
        """Test listing returns every product in feed order."""
        response = client.get("/api/v1/products")
        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["id"] for p in products] == [
            "OLJCESPC7Z",
            "66VCHSJNUP",
            "1YMWWN1N4O",
            "SHIRT00001",
            "POLO000001",
        ]

    def test_product_wire_format(self, client: TestClient):
        """Test products serialize with camelCase price fields."""
        response = client.get("/api/v1/products/OLJCESPC7Z")
        assert response.status_code == 200
        assert response.json() == {
            "id": "OLJCESPC7Z",
            "name": "Sunglasses",
            "description": "Add a modern touch to your outfits.",
            "picture": "/static/img/products/oljcespc7z.jpg",
            "priceUsd": {"currencyCode": "USD", "units": 19, "nanos": 990000000},
        }

    def test_get_product_not_found(self, client: TestClient):
        """Test unknown identifier returns structured 404."""
        response = client.get("/api/v1/products/missing-id")
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "PRODUCT_NOT_FOUND"
        assert error["details"] == {"product_id": "missing-id"}
        assert "missing-id" in error["message"]

    def test_search_products(self, client: TestClient):
        """Test search matches names and descriptions case-insensitively."""
        response = client.get("/api/v1/search", params={"query": "shirt"})
        assert response.status_code == 200
        ids = [p["id"] for p in response.json()["results"]]
        assert ids == ["SHIRT00001", "POLO000001"]

    def test_search_without_query_returns_everything(self, client: TestClient):
        """Test missing or empty query matches every product."""
        assert len(client.get("/api/v1/search").json()["results"]) == 5
        assert len(client.get("/api/v1/search", params={"query": ""}).json()["results"]) == 5

    def test_search_no_results(self, client: TestClient):
        response = client.get("/api/v1/search", params={"query": "bicycle"})
        assert response.status_code == 200
        assert response.json() == {"results": []}


class TestFeedOutage:
    """Tests for the API when the feed is down."""

    def test_failing_feed_serves_empty_catalog(self):
        catalog = ProductCatalog(StaticFeed([make_record("A", "Mug")], fail=True))
        app.dependency_overrides[require_catalog] = lambda: catalog

        try:
            with TestClient(app) as client:
                assert client.get("/api/v1/products").json() == {"products": []}
                assert client.get("/api/v1/search").json() == {"results": []}
                assert client.get("/api/v1/products/A").status_code == 404
        finally:
            app.dependency_overrides.clear()


class TestProductIdentifiers:
    """Tests for identifiers that look like other routes or contain slashes."""

    @staticmethod
    def _client_for(records):
        catalog = ProductCatalog(StaticFeed(records))
        app.dependency_overrides[require_catalog] = lambda: catalog
        return TestClient(app)

    def test_product_named_search_is_reachable(self):
        try:
            with self._client_for([make_record("search", "Searchlight"), make_record("B", "Mug")]) as client:
                response = client.get("/api/v1/products/search")
                assert response.status_code == 200
                assert response.json()["id"] == "search"
                assert response.json()["name"] == "Searchlight"
        finally:
            app.dependency_overrides.clear()

    def test_identifier_with_slash_is_reachable(self):
        try:
            with self._client_for([make_record("a/b", "Slashy")]) as client:
                response = client.get("/api/v1/products/a/b")
                assert response.status_code == 200
                assert response.json()["name"] == "Slashy"

                response = client.get("/api/v1/products/a%2Fb")
                assert response.status_code == 200
                assert response.json()["id"] == "a/b"
        finally:
            app.dependency_overrides.clear()

    def test_missing_identifier_with_slash_is_structured_404(self):
        try:
            with self._client_for([make_record("A", "Mug")]) as client:
                response = client.get("/api/v1/products/x/y")
                assert response.status_code == 404
                error = response.json()["error"]
                assert error["code"] == "PRODUCT_NOT_FOUND"
                assert error["details"] == {"product_id": "x/y"}
        finally:
            app.dependency_overrides.clear()


class BrokenCatalog:
    """Catalog stand-in that fails unexpectedly."""

    async def list_products(self):
        raise RuntimeError("disk on fire")


class TestUnexpectedErrors:
    """Tests for errors no handler anticipates."""

    def test_unhandled_error_returns_internal_error(self):
        app.dependency_overrides[require_catalog] = lambda: BrokenCatalog()

        try:
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.get("/api/v1/products")
                assert response.status_code == 500
                data = response.json()
                assert data["success"] is False
                assert data["error"]["code"] == "INTERNAL_ERROR"
                assert "disk on fire" not in data["error"]["message"]
        finally:
            app.dependency_overrides.clear()
