"""
Category Analytics - Records and Aggregation

Plain aggregation records computed from already-fetched Category and Product
collections. Nothing here has its own lifecycle: every record is recomputed
per query by the analytics repositories.

Metrics per category:
- Product count, total stock quantity
- Average / min / max price (0 when the category has no products)
- Inventory value (sum of price x quantity)
- Low stock (0 < quantity < threshold) and out of stock (quantity == 0) counts
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from demo_inventory.domain.category import Category
from demo_inventory.domain.product import Product

DEFAULT_LOW_STOCK_THRESHOLD = 10

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Assumed share of inventory value sold per month when no sales data exists
MONTHLY_TURNOVER_RATE = Decimal("0.1")


@dataclass
class CategoryAnalyticsData:
    """Aggregated metrics for one category"""
    category_id: int
    category_name: str
    category_description: str = ""
    total_products: int = 0
    total_stock_quantity: int = 0
    average_price: Decimal = ZERO
    min_price: Decimal = ZERO
    max_price: Decimal = ZERO
    total_inventory_value: Decimal = ZERO
    low_stock_products: int = 0
    out_of_stock_products: int = 0
    last_product_added: Optional[datetime] = None
    category_created_at: Optional[datetime] = None
    category_updated_at: Optional[datetime] = None

    @property
    def has_stock_issues(self) -> bool:
        return self.low_stock_products > 0 or self.out_of_stock_products > 0


@dataclass
class OverallCategoryMetrics:
    """Totals across every category and product"""
    total_categories: int = 0
    total_products: int = 0
    total_inventory_value: Decimal = ZERO
    categories_with_products: int = 0
    empty_categories: int = 0
    average_products_per_category: Decimal = ZERO


@dataclass
class CategoryTrendData:
    """Recent-activity trend for one category"""
    category_id: int
    category_name: str
    trend_score: Decimal = ZERO
    trend_rank: int = 0
    product_growth_rate: Decimal = ZERO
    inventory_turnover: Decimal = ZERO
    recent_products_added: int = 0
    analysis_period_start: Optional[datetime] = None
    analysis_period_end: Optional[datetime] = None


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC"""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def filter_by_created(
    products: Iterable[Product],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Product]:
    """Keep products created inside the inclusive [start, end] window"""
    start = ensure_utc(start)
    end = ensure_utc(end)
    return [
        p for p in products
        if (start is None or ensure_utc(p.created_at) >= start)
        and (end is None or ensure_utc(p.created_at) <= end)
    ]


def summarize_category(
    category: Category,
    products: Sequence[Product],
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> CategoryAnalyticsData:
    """
    Aggregate one category's products into a CategoryAnalyticsData record.

    Args:
        category: The category being summarized
        products: Products belonging to the category (already filtered)
        low_stock_threshold: Quantities strictly below this (and above 0) count as low stock

    Returns:
        CategoryAnalyticsData for the category
    """
    data = CategoryAnalyticsData(
        category_id=category.id,
        category_name=category.name,
        category_description=category.description,
        category_created_at=category.created_at,
        category_updated_at=category.updated_at,
    )
    if not products:
        return data

    prices = [p.price for p in products]
    data.total_products = len(products)
    data.total_stock_quantity = sum(p.quantity_in_stock for p in products)
    data.average_price = sum(prices, ZERO) / len(prices)
    data.min_price = min(prices)
    data.max_price = max(prices)
    data.total_inventory_value = sum((p.inventory_value for p in products), ZERO)
    data.low_stock_products = sum(
        1 for p in products if 0 < p.quantity_in_stock < low_stock_threshold
    )
    data.out_of_stock_products = sum(1 for p in products if p.quantity_in_stock == 0)
    data.last_product_added = max(ensure_utc(p.created_at) for p in products)
    return data


def summarize_overall(
    categories: Sequence[Category],
    products: Sequence[Product],
) -> OverallCategoryMetrics:
    """Totals across all categories; uncategorized products still count"""
    category_ids = {c.id for c in categories}
    used_ids = {p.category_id for p in products if p.category_id in category_ids}

    total_categories = len(categories)
    total_products = len(products)
    with_products = len(used_ids)

    return OverallCategoryMetrics(
        total_categories=total_categories,
        total_products=total_products,
        total_inventory_value=sum((p.inventory_value for p in products), ZERO),
        categories_with_products=with_products,
        empty_categories=total_categories - with_products,
        average_products_per_category=(
            Decimal(total_products) / total_categories if total_categories > 0 else ZERO
        ),
    )


def calculate_trend_score(recent_products: int, total_products: int, category_age_days: int) -> Decimal:
    """Score recent activity, with a bonus for mature and well-stocked categories"""
    activity_score = Decimal(recent_products * 10)
    if category_age_days > 365:
        maturity_bonus = Decimal(5)
    elif category_age_days > 90:
        maturity_bonus = Decimal(2)
    else:
        maturity_bonus = ZERO
    density_score = (
        min(Decimal(total_products) / 10, Decimal(5)) if total_products > 0 else ZERO
    )
    return activity_score + maturity_bonus + density_score


def calculate_inventory_turnover(inventory_value: Decimal, days_period: int) -> Decimal:
    """Estimated turnover percentage for the period (no sales data available)"""
    if inventory_value <= 0:
        return ZERO
    estimated_monthly_sales = inventory_value * MONTHLY_TURNOVER_RATE
    period_turnover = estimated_monthly_sales * (Decimal(days_period) / 30)
    return round(period_turnover / inventory_value * HUNDRED, 2)


def build_category_trends(
    categories: Sequence[Category],
    products: Sequence[Product],
    days_period: int = 30,
    now: Optional[datetime] = None,
) -> List[CategoryTrendData]:
    """
    Compute trend records for every category that has products.

    Returns:
        Trends sorted by score (highest first) with trend_rank 1..n
    """
    now = ensure_utc(now) or datetime.now(timezone.utc)
    period_start = now - timedelta(days=days_period)

    trends = []
    for category in categories:
        members = [p for p in products if p.category_id == category.id]
        if not members:
            continue

        total = len(members)
        recent = sum(1 for p in members if ensure_utc(p.created_at) >= period_start)
        inventory_value = sum((p.inventory_value for p in members), ZERO)
        age_days = (now - ensure_utc(category.created_at)).days

        trends.append(CategoryTrendData(
            category_id=category.id,
            category_name=category.name,
            trend_score=calculate_trend_score(recent, total, age_days),
            product_growth_rate=Decimal(recent) / total * HUNDRED,
            inventory_turnover=calculate_inventory_turnover(inventory_value, days_period),
            recent_products_added=recent,
            analysis_period_start=period_start,
            analysis_period_end=now,
        ))

    trends.sort(key=lambda t: t.trend_score, reverse=True)
    for rank, trend in enumerate(trends, start=1):
        trend.trend_rank = rank
    return trends
