"""
Integration Tests - Categories and Category Analytics API
"""
import pytest

ANALYTICS = "/api/categories/analytics"


@pytest.fixture
def catalog(client, auth_headers):
    """Tools (2 products, one low stock) and Books (1 product); Empty has none"""
    ids = {}
    for name in ("Tools", "Books", "Empty"):
        response = client.post("/api/categories", json={"name": name}, headers=auth_headers)
        assert response.status_code == 201, response.text
        ids[name] = response.json()["id"]

    products = [
        ("Hammer", "T-1", 10.0, 20, ids["Tools"]),
        ("Wrench", "T-2", 20.0, 5, ids["Tools"]),
        ("Novel", "B-1", 50.0, 20, ids["Books"]),
    ]
    for name, sku, price, quantity, category_id in products:
        response = client.post(
            "/api/products",
            json={
                "name": name,
                "sku": sku,
                "price": price,
                "quantity_in_stock": quantity,
                "category_id": category_id,
            },
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text
    return ids


class TestCategoriesApi:
    """Tests for /api/categories"""

    def test_create_and_list(self, client, auth_headers):
        response = client.post(
            "/api/categories", json={"name": "Garden", "description": "Outdoor"}, headers=auth_headers
        )

        assert response.status_code == 201
        assert [c["name"] for c in client.get("/api/categories").json()] == ["Garden"]

    def test_create_requires_key(self, client):
        assert client.post("/api/categories", json={"name": "Garden"}).status_code == 401

    def test_duplicate_name_is_400(self, client, auth_headers):
        client.post("/api/categories", json={"name": "Garden"}, headers=auth_headers)

        response = client.post("/api/categories", json={"name": "garden"}, headers=auth_headers)

        assert response.status_code == 400

    def test_get_by_id(self, client, catalog):
        assert client.get(f"/api/categories/{catalog['Books']}").json()["name"] == "Books"
        assert client.get("/api/categories/999").json()["error"]["code"] == "CATEGORY_NOT_FOUND"


class TestCategoryMetricsApi:

    def test_metrics(self, client, catalog):
        response = client.get(ANALYTICS)

        assert response.status_code == 200
        body = response.json()
        assert body["total_categories"] == 3
        assert body["total_products"] == 3
        assert body["total_inventory_value"] == 1300.0
        assert body["empty_categories"] == 1
        assert [c["category_name"] for c in body["category_analytics"]] == ["Tools", "Books"]

    def test_include_empty(self, client, catalog):
        body = client.get(f"{ANALYTICS}?include_only_active_categories=false").json()

        assert len(body["category_analytics"]) == 3

    def test_inverted_dates_are_400(self, client):
        response = client.get(f"{ANALYTICS}?start_date=2025-02-01T00:00:00&end_date=2025-01-01T00:00:00")

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Start date cannot be greater than end date"

    def test_negative_threshold_is_400(self, client):
        assert client.get(f"{ANALYTICS}?low_stock_threshold=-1").status_code == 400

    def test_category_by_id(self, client, catalog):
        body = client.get(f"{ANALYTICS}/{catalog['Tools']}").json()

        assert body["total_products"] == 2
        assert body["low_stock_products"] == 1

    def test_category_by_id_errors(self, client):
        assert client.get(f"{ANALYTICS}/0").status_code == 400
        assert client.get(f"{ANALYTICS}/999").status_code == 404


class TestRankingsApi:
    """Tests for top, trends, distribution and stock issues"""

    def test_top_by_value(self, client, catalog):
        body = client.get(f"{ANALYTICS}/top?sort_by=InventoryValue&count=1").json()

        assert [c["category_name"] for c in body] == ["Books"]

    def test_top_average_price_falls_back_to_count(self, client, catalog):
        body = client.get(f"{ANALYTICS}/top?sort_by=AveragePrice").json()

        assert [c["category_name"] for c in body] == ["Tools", "Books"]

    @pytest.mark.parametrize(
        "query",
        ["count=0", "count=51", "sort_by=Name"],
    )
    def test_top_rejects_bad_parameters(self, client, query):
        assert client.get(f"{ANALYTICS}/top?{query}").status_code == 400

    @pytest.mark.parametrize(
        "query",
        ["days_period=6", "days_period=366", "count=0", "count=21"],
    )
    def test_trends_rejects_bad_parameters(self, client, query):
        assert client.get(f"{ANALYTICS}/trends?{query}").status_code == 400

    def test_trends(self, client, catalog):
        body = client.get(f"{ANALYTICS}/trends?days_period=7&count=20").json()

        assert [t["trend_rank"] for t in body] == [1, 2]

    def test_distribution(self, client, catalog):
        body = client.get(f"{ANALYTICS}/distribution").json()

        assert {d["category_name"] for d in body} == {"Tools", "Books"}
        assert sum(d["product_percentage"] for d in body) == pytest.approx(100)

    def test_stock_issues(self, client, catalog):
        body = client.get(f"{ANALYTICS}/stock-issues").json()

        assert [c["category_name"] for c in body] == ["Tools"]

    @pytest.mark.parametrize("threshold", [0, 101])
    def test_stock_issues_threshold_bounds(self, client, threshold):
        assert client.get(f"{ANALYTICS}/stock-issues?low_stock_threshold={threshold}").status_code == 400

    def test_summary(self, client, catalog):
        body = client.get(f"{ANALYTICS}/summary").json()

        assert body["total_products"] == 3
        assert body["top_categories_by_value"][0] == {
            "category_name": "Books",
            "total_inventory_value": 1000.0,
        }
        assert body["categories_with_stock_issues"] == 1
