"""
Category Analytics Repositories

Both backends answer the analytics queries the same way: load the
categories and products once per query, then aggregate them with the pure
functions in demo_inventory.domain.analytics. The SQL backend computes the
overall totals with SQL aggregates instead of loading rows.
"""

from abc import abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from demo_inventory.database.models import CategoryRecord, ProductRecord
from demo_inventory.domain.analytics import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    CategoryAnalyticsData,
    CategoryTrendData,
    OverallCategoryMetrics,
    build_category_trends,
    filter_by_created,
    summarize_category,
    summarize_overall,
)
from demo_inventory.domain.category import Category
from demo_inventory.domain.product import Product
from demo_inventory.domain.repositories import (
    CategoryAnalyticsRepository,
    CategoryRepository,
    ProductRepository,
)
from demo_inventory.infrastructure.sql import category_from_record, product_from_record

logger = structlog.get_logger(__name__)

Snapshot = Tuple[List[Category], List[Product]]

CENTS = Decimal("0.01")


def _members(category: Category, products: Sequence[Product]) -> List[Product]:
    return [p for p in products if p.category_id == category.id]


class SnapshotCategoryAnalyticsRepository(CategoryAnalyticsRepository):
    """Analytics over a freshly loaded (categories, products) snapshot"""

    @abstractmethod
    async def load_snapshot(self) -> Snapshot:
        """Return all categories and all products"""

    async def get_category_analytics(
        self,
        include_empty_categories: bool = True,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> List[CategoryAnalyticsData]:
        logger.info(
            "Retrieving category analytics data",
            include_empty=include_empty_categories,
            start_date=str(start_date),
            end_date=str(end_date),
        )
        categories, products = await self.load_snapshot()

        result = []
        for category in categories:
            members = _members(category, products)
            # Emptiness is judged on all products, before the date filter
            if not include_empty_categories and not members:
                continue
            result.append(summarize_category(
                category, filter_by_created(members, start_date, end_date), low_stock_threshold
            ))

        logger.info("Retrieved analytics data", category_count=len(result))
        return result

    async def get_category_analytics_by_id(
        self,
        category_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Optional[CategoryAnalyticsData]:
        categories, products = await self.load_snapshot()
        category = next((c for c in categories if c.id == category_id), None)
        if category is None:
            logger.warning("Category not found", category_id=category_id)
            return None
        return summarize_category(
            category, filter_by_created(_members(category, products), start_date, end_date)
        )

    async def _non_empty_summaries(self) -> List[CategoryAnalyticsData]:
        categories, products = await self.load_snapshot()
        summaries = (summarize_category(c, _members(c, products)) for c in categories)
        return [s for s in summaries if s.total_products > 0]

    async def get_top_categories_by_product_count(self, count: int = 10) -> List[CategoryAnalyticsData]:
        summaries = await self._non_empty_summaries()
        summaries.sort(key=lambda s: s.total_products, reverse=True)
        return summaries[:count]

    async def get_top_categories_by_inventory_value(self, count: int = 10) -> List[CategoryAnalyticsData]:
        summaries = await self._non_empty_summaries()
        summaries.sort(key=lambda s: s.total_inventory_value, reverse=True)
        return summaries[:count]

    async def get_categories_with_low_stock(
        self, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> List[CategoryAnalyticsData]:
        categories, products = await self.load_snapshot()

        result = []
        for category in categories:
            members = _members(category, products)
            if any(p.quantity_in_stock <= low_stock_threshold for p in members):
                result.append(summarize_category(category, members, low_stock_threshold))
        return result

    async def get_overall_category_metrics(self) -> OverallCategoryMetrics:
        categories, products = await self.load_snapshot()
        return summarize_overall(categories, products)

    async def get_category_trends(self, days_period: int = 30) -> List[CategoryTrendData]:
        categories, products = await self.load_snapshot()
        trends = build_category_trends(categories, products, days_period)
        logger.info("Retrieved trend data", days_period=days_period, category_count=len(trends))
        return trends


class InMemoryCategoryAnalyticsRepository(SnapshotCategoryAnalyticsRepository):
    """Analytics over the in-memory product and category repositories"""

    def __init__(self, products: ProductRepository, categories: CategoryRepository):
        self._products = products
        self._categories = categories

    async def load_snapshot(self) -> Snapshot:
        return await self._categories.get_all(), await self._products.get_all()


class SqlCategoryAnalyticsRepository(SnapshotCategoryAnalyticsRepository):
    """Analytics over the categories and products tables"""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def load_snapshot(self) -> Snapshot:
        categories = await self._session.execute(select(CategoryRecord).order_by(CategoryRecord.id))
        products = await self._session.execute(select(ProductRecord).order_by(ProductRecord.id))
        return (
            [category_from_record(r) for r in categories.scalars().all()],
            [product_from_record(r) for r in products.scalars().all()],
        )

    async def get_overall_category_metrics(self) -> OverallCategoryMetrics:
        total_categories = (
            await self._session.execute(select(func.count(CategoryRecord.id)))
        ).scalar() or 0
        total_products = (
            await self._session.execute(select(func.count(ProductRecord.id)))
        ).scalar() or 0
        total_value = (
            await self._session.execute(
                select(func.sum(ProductRecord.price * ProductRecord.quantity_in_stock))
            )
        ).scalar() or 0
        with_products = (
            await self._session.execute(
                select(func.count(func.distinct(ProductRecord.category_id)))
                .where(ProductRecord.category_id.is_not(None))
            )
        ).scalar() or 0

        metrics = OverallCategoryMetrics(
            total_categories=total_categories,
            total_products=total_products,
            # price has two decimal places and quantity is integral
            total_inventory_value=Decimal(str(total_value)).quantize(CENTS),
            categories_with_products=with_products,
            empty_categories=total_categories - with_products,
            average_products_per_category=(
                Decimal(total_products) / total_categories if total_categories > 0 else Decimal("0")
            ),
        )
        logger.info(
            "Retrieved overall metrics",
            total_categories=metrics.total_categories,
            total_products=metrics.total_products,
            total_value=str(metrics.total_inventory_value),
        )
        return metrics
