"""
Unit Tests - Analytics Aggregation
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from demo_inventory.domain.analytics import (
    build_category_trends,
    calculate_inventory_turnover,
    calculate_trend_score,
    ensure_utc,
    filter_by_created,
    summarize_category,
    summarize_overall,
)
from demo_inventory.domain.category import Category
from demo_inventory.domain.product import Product

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def product(sku, price, quantity, category_id=1, created_at=NOW):
    return Product(
        name=f"Product {sku}",
        sku=sku,
        price=Decimal(price),
        quantity_in_stock=quantity,
        category_id=category_id,
        created_at=created_at,
    )


class TestSummarizeCategory:
    """Tests for per-category aggregation"""

    def test_empty_category_has_zero_metrics(self):
        data = summarize_category(Category(name="Empty", id=1), [])

        assert data.total_products == 0
        assert data.average_price == Decimal("0")
        assert data.min_price == Decimal("0")
        assert data.max_price == Decimal("0")
        assert data.total_inventory_value == Decimal("0")
        assert data.last_product_added is None
        assert not data.has_stock_issues

    def test_aggregates_prices_and_stock(self):
        products = [
            product("A-1", "10.00", 5),
            product("A-2", "20.00", 0),
            product("A-3", "30.00", 20),
        ]

        data = summarize_category(Category(name="Tools", id=1), products)

        assert data.total_products == 3
        assert data.total_stock_quantity == 25
        assert data.average_price == Decimal("20")
        assert data.min_price == Decimal("10.00")
        assert data.max_price == Decimal("30.00")
        assert data.total_inventory_value == Decimal("650.00")

    def test_low_and_out_of_stock_counts(self):
        """Test low stock is 0 < quantity < threshold, out of stock is quantity == 0"""
        products = [
            product("B-1", "1.00", 0),
            product("B-2", "1.00", 1),
            product("B-3", "1.00", 9),
            product("B-4", "1.00", 10),
        ]

        data = summarize_category(Category(name="Tools", id=1), products, low_stock_threshold=10)

        assert data.out_of_stock_products == 1
        assert data.low_stock_products == 2
        assert data.has_stock_issues


class TestSummarizeOverall:
    """Tests for totals across categories"""

    def test_counts_categories_with_products(self):
        categories = [Category(name="A", id=1), Category(name="B", id=2), Category(name="C", id=3)]
        products = [
            product("C-1", "5.00", 2, category_id=1),
            product("C-2", "5.00", 2, category_id=1),
            product("C-3", "5.00", 2, category_id=None),
        ]

        metrics = summarize_overall(categories, products)

        assert metrics.total_categories == 3
        assert metrics.total_products == 3
        assert metrics.categories_with_products == 1
        assert metrics.empty_categories == 2
        assert metrics.total_inventory_value == Decimal("30.00")
        assert metrics.average_products_per_category == Decimal(1)

    def test_no_categories(self):
        metrics = summarize_overall([], [])

        assert metrics.average_products_per_category == Decimal("0")


class TestTrends:
    """Tests for trend scoring"""

    @pytest.mark.parametrize(
        "recent,total,age_days,expected",
        [
            (0, 0, 10, Decimal("0")),
            (2, 10, 10, Decimal("21")),
            (1, 100, 100, Decimal("17")),
            (0, 5, 400, Decimal("5.5")),
        ],
    )
    def test_trend_score(self, recent, total, age_days, expected):
        assert calculate_trend_score(recent, total, age_days) == expected

    def test_inventory_turnover(self):
        assert calculate_inventory_turnover(Decimal("1000"), 30) == Decimal("10.00")
        assert calculate_inventory_turnover(Decimal("1000"), 90) == Decimal("30.00")
        assert calculate_inventory_turnover(Decimal("0"), 30) == Decimal("0")

    def test_build_category_trends_ranks_by_score(self):
        old = NOW - timedelta(days=400)
        categories = [
            Category(name="Quiet", id=1, created_at=old),
            Category(name="Busy", id=2, created_at=NOW - timedelta(days=10)),
            Category(name="Empty", id=3, created_at=old),
        ]
        products = [
            product("Q-1", "10.00", 1, category_id=1, created_at=old),
            product("B-1", "10.00", 1, category_id=2, created_at=NOW - timedelta(days=1)),
            product("B-2", "10.00", 1, category_id=2, created_at=NOW - timedelta(days=2)),
        ]

        trends = build_category_trends(categories, products, days_period=30, now=NOW)

        assert [t.category_name for t in trends] == ["Busy", "Quiet"]
        assert [t.trend_rank for t in trends] == [1, 2]
        assert trends[0].recent_products_added == 2
        assert trends[0].product_growth_rate == Decimal("100")
        assert trends[1].product_growth_rate == Decimal("0")


class TestDateFilter:
    """Tests for creation-date filtering"""

    def test_inclusive_window(self):
        products = [
            product("D-1", "1.00", 1, created_at=NOW - timedelta(days=2)),
            product("D-2", "1.00", 1, created_at=NOW),
            product("D-3", "1.00", 1, created_at=NOW + timedelta(days=2)),
        ]

        kept = filter_by_created(products, start=NOW - timedelta(days=2), end=NOW)

        assert [p.sku for p in kept] == ["D-1", "D-2"]

    def test_naive_bounds_treated_as_utc(self):
        naive = datetime(2025, 6, 1, 12, 0)

        assert ensure_utc(naive) == NOW
        assert filter_by_created([product("E-1", "1.00", 1)], start=naive) != []
