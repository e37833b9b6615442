"""
Category Analytics Service

Turns the aggregation records of a CategoryAnalyticsRepository into the
analytics DTOs served by the API:

- Metrics for every category, with each category's share of inventory value
- Top categories by product count or inventory value
- Recent-activity trends
- Product / value / stock distribution
- Categories with low or zero stock
- A compact dashboard summary
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, List, Optional

import structlog

from demo_inventory.application.schemas import (
    AnalyticsDateRangeDto,
    AnalyticsSummaryDto,
    CategoryAnalyticsDto,
    CategoryInventoryDistributionDto,
    CategoryMetricsDto,
    CategoryTrendDto,
    CategoryValueDto,
)
from demo_inventory.domain.analytics import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    HUNDRED,
    ZERO,
    CategoryAnalyticsData,
    CategoryTrendData,
)
from demo_inventory.domain.repositories import CategoryAnalyticsRepository

SORT_PRODUCT_COUNT = "productcount"
SORT_INVENTORY_VALUE = "inventoryvalue"

SUMMARY_TOP_CANDIDATES = 5
SUMMARY_TOP_SHOWN = 3


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    return Decimal(part) / Decimal(whole) * HUNDRED if whole > 0 else ZERO


def to_category_analytics_dto(
    data: CategoryAnalyticsData, total_inventory_value: Decimal
) -> CategoryAnalyticsDto:
    return CategoryAnalyticsDto(
        category_id=data.category_id,
        category_name=data.category_name,
        category_description=data.category_description,
        total_products=data.total_products,
        total_stock_quantity=data.total_stock_quantity,
        average_price=data.average_price,
        min_price=data.min_price,
        max_price=data.max_price,
        total_inventory_value=data.total_inventory_value,
        inventory_value_percentage=_percentage(data.total_inventory_value, total_inventory_value),
        low_stock_products=data.low_stock_products,
        out_of_stock_products=data.out_of_stock_products,
    )


def to_category_trend_dto(data: CategoryTrendData) -> CategoryTrendDto:
    return CategoryTrendDto(
        category_id=data.category_id,
        category_name=data.category_name,
        trend_score=data.trend_score,
        trend_rank=data.trend_rank,
        product_growth_rate=data.product_growth_rate,
        inventory_turnover=data.inventory_turnover,
    )


class CategoryAnalyticsService:
    """
    Category analytics use cases.

    Args:
        repository: Source of aggregated category data
        logger: Logger to report to (defaults to this module's structlog logger)
    """

    def __init__(self, repository: CategoryAnalyticsRepository, logger: Optional[Any] = None):
        if repository is None:
            raise ValueError("repository is required")
        self._repository = repository
        self._logger = logger or structlog.get_logger(__name__)

    async def get_category_metrics(
        self, date_range: Optional[AnalyticsDateRangeDto] = None
    ) -> CategoryMetricsDto:
        """Overall metrics plus analytics for each category"""
        date_range = date_range or AnalyticsDateRangeDto()
        self._logger.info(
            "Retrieving category metrics",
            start_date=str(date_range.start_date),
            end_date=str(date_range.end_date),
        )
        try:
            analytics = await self._repository.get_category_analytics(
                include_empty_categories=not date_range.include_only_active_categories,
                start_date=date_range.start_date,
                end_date=date_range.end_date,
                low_stock_threshold=date_range.low_stock_threshold,
            )
            overall = await self._repository.get_overall_category_metrics()

            result = CategoryMetricsDto(
                total_categories=overall.total_categories,
                total_products=overall.total_products,
                total_inventory_value=overall.total_inventory_value,
                average_products_per_category=overall.average_products_per_category,
                categories_with_products=overall.categories_with_products,
                empty_categories=overall.empty_categories,
                category_analytics=[
                    to_category_analytics_dto(a, overall.total_inventory_value) for a in analytics
                ],
            )
        except Exception as e:
            self._logger.error("Error retrieving category metrics", error=str(e))
            raise

        self._logger.info(
            "Retrieved category metrics",
            total_categories=result.total_categories,
            total_products=result.total_products,
        )
        return result

    async def get_category_analytics_by_id(
        self, category_id: int, date_range: Optional[AnalyticsDateRangeDto] = None
    ) -> Optional[CategoryAnalyticsDto]:
        self._logger.info("Retrieving category analytics", category_id=category_id)
        try:
            data = await self._repository.get_category_analytics_by_id(
                category_id,
                start_date=date_range.start_date if date_range else None,
                end_date=date_range.end_date if date_range else None,
            )
            if data is None:
                self._logger.warning("Category not found", category_id=category_id)
                return None

            overall = await self._repository.get_overall_category_metrics()
            result = to_category_analytics_dto(data, overall.total_inventory_value)
        except Exception as e:
            self._logger.error("Error retrieving category analytics", category_id=category_id, error=str(e))
            raise

        self._logger.info(
            "Retrieved category analytics",
            category_id=category_id,
            total_products=result.total_products,
            total_inventory_value=str(result.total_inventory_value),
        )
        return result

    async def get_top_categories(
        self, count: int = 10, sort_by: str = "ProductCount"
    ) -> List[CategoryAnalyticsDto]:
        """
        Top categories that have products.

        Args:
            count: Maximum number of categories to return
            sort_by: "ProductCount" or "InventoryValue" (case-insensitive);
                anything else falls back to product count

        Returns:
            Categories ordered by the chosen metric, highest first
        """
        self._logger.info("Retrieving top categories", count=count, sort_by=sort_by)
        try:
            key = (sort_by or "").lower()
            if key == SORT_INVENTORY_VALUE:
                data = await self._repository.get_top_categories_by_inventory_value(count)
            else:
                if key != SORT_PRODUCT_COUNT:
                    self._logger.warning(
                        "Invalid sort parameter, defaulting to ProductCount", sort_by=sort_by
                    )
                data = await self._repository.get_top_categories_by_product_count(count)

            overall = await self._repository.get_overall_category_metrics()
            result = [to_category_analytics_dto(d, overall.total_inventory_value) for d in data]
        except Exception as e:
            self._logger.error("Error retrieving top categories", error=str(e))
            raise

        self._logger.info("Retrieved top categories", result_count=len(result))
        return result

    async def get_category_trends(self, days_period: int = 30, count: int = 10) -> List[CategoryTrendDto]:
        self._logger.info("Retrieving category trends", days_period=days_period, count=count)
        try:
            trends = await self._repository.get_category_trends(days_period)
            result = [to_category_trend_dto(t) for t in trends[:count]]
        except Exception as e:
            self._logger.error("Error retrieving category trends", error=str(e))
            raise

        self._logger.info("Retrieved category trends", trend_count=len(result))
        return result

    async def get_category_inventory_distribution(self) -> List[CategoryInventoryDistributionDto]:
        """Each non-empty category's share of products, inventory value and stock"""
        self._logger.info("Retrieving category inventory distribution")
        try:
            analytics = await self._repository.get_category_analytics(include_empty_categories=False)
            overall = await self._repository.get_overall_category_metrics()
            total_stock = sum(a.total_stock_quantity for a in analytics)

            result = [
                CategoryInventoryDistributionDto(
                    category_id=a.category_id,
                    category_name=a.category_name,
                    product_percentage=_percentage(a.total_products, overall.total_products),
                    value_percentage=_percentage(a.total_inventory_value, overall.total_inventory_value),
                    stock_percentage=_percentage(a.total_stock_quantity, total_stock),
                )
                for a in analytics
            ]
        except Exception as e:
            self._logger.error("Error retrieving inventory distribution", error=str(e))
            raise

        self._logger.info("Retrieved inventory distribution", category_count=len(result))
        return result

    async def get_categories_with_stock_issues(
        self, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> List[CategoryAnalyticsDto]:
        self._logger.info("Retrieving categories with stock issues", threshold=low_stock_threshold)
        try:
            data = await self._repository.get_categories_with_low_stock(low_stock_threshold)
            overall = await self._repository.get_overall_category_metrics()
            result = [
                to_category_analytics_dto(d, overall.total_inventory_value)
                for d in data
                if d.has_stock_issues
            ]
        except Exception as e:
            self._logger.error("Error retrieving categories with stock issues", error=str(e))
            raise

        self._logger.info("Found categories with stock issues", category_count=len(result))
        return result

    async def get_analytics_summary(self) -> AnalyticsSummaryDto:
        """Key metrics for dashboard display"""
        self._logger.info("Retrieving analytics summary")
        try:
            overall = await self._repository.get_overall_category_metrics()
            top = await self._repository.get_top_categories_by_inventory_value(SUMMARY_TOP_CANDIDATES)
            low_stock = await self._repository.get_categories_with_low_stock(DEFAULT_LOW_STOCK_THRESHOLD)

            summary = AnalyticsSummaryDto(
                total_categories=overall.total_categories,
                total_products=overall.total_products,
                total_inventory_value=overall.total_inventory_value,
                categories_with_products=overall.categories_with_products,
                empty_categories=overall.empty_categories,
                average_products_per_category=overall.average_products_per_category,
                top_categories_by_value=[
                    CategoryValueDto(
                        category_name=c.category_name,
                        total_inventory_value=c.total_inventory_value,
                    )
                    for c in top[:SUMMARY_TOP_SHOWN]
                ],
                categories_with_stock_issues=sum(1 for c in low_stock if c.has_stock_issues),
                last_updated=datetime.now(timezone.utc),
            )
        except Exception as e:
            self._logger.error("Error retrieving analytics summary", error=str(e))
            raise

        self._logger.info(
            "Generated analytics summary",
            total_categories=summary.total_categories,
            total_products=summary.total_products,
        )
        return summary
