"""
Category Analytics API Endpoints

Read-only analytics over categories and their products for dashboards.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from demo_inventory.application import CategoryAnalyticsService
from demo_inventory.application.schemas import (
    AnalyticsDateRangeDto,
    AnalyticsSummaryDto,
    CategoryAnalyticsDto,
    CategoryInventoryDistributionDto,
    CategoryMetricsDto,
    CategoryTrendDto,
)
from demo_inventory.config import Settings
from demo_inventory.domain.analytics import ensure_utc
from demo_inventory.domain.exceptions import CategoryNotFoundError, EntityValidationError
from demo_inventory.serving.api.dependencies import get_app_settings, get_category_analytics_service

router = APIRouter()

VALID_SORT_OPTIONS = ("ProductCount", "InventoryValue", "AveragePrice")


def _check_date_range(start_date: Optional[datetime], end_date: Optional[datetime]) -> None:
    if start_date is not None and end_date is not None and ensure_utc(start_date) > ensure_utc(end_date):
        raise EntityValidationError("Start date cannot be greater than end date", "start_date")


@router.get("", response_model=CategoryMetricsDto)
async def get_category_metrics(
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    include_only_active_categories: bool = True,
    low_stock_threshold: Optional[int] = None,
    settings: Settings = Depends(get_app_settings),
    service: CategoryAnalyticsService = Depends(get_category_analytics_service),
) -> CategoryMetricsDto:
    """
    Comprehensive analytics for all categories.

    Empty categories are listed only when include_only_active_categories
    is false.
    """
    _check_date_range(start_date, end_date)
    if low_stock_threshold is None:
        low_stock_threshold = settings.low_stock_threshold
    if low_stock_threshold < 0:
        raise EntityValidationError("Low stock threshold must be non-negative", "low_stock_threshold")

    return await service.get_category_metrics(
        AnalyticsDateRangeDto(
            start_date=start_date,
            end_date=end_date,
            include_only_active_categories=include_only_active_categories,
            low_stock_threshold=low_stock_threshold,
        )
    )


@router.get("/top", response_model=List[CategoryAnalyticsDto])
async def get_top_categories(
    count: int = 10,
    sort_by: str = Query("ProductCount"),
    service: CategoryAnalyticsService = Depends(get_category_analytics_service),
) -> List[CategoryAnalyticsDto]:
    """Top categories by ProductCount, InventoryValue or AveragePrice."""
    if count <= 0 or count > 50:
        raise EntityValidationError("Count must be between 1 and 50", "count")
    if sort_by.lower() not in (option.lower() for option in VALID_SORT_OPTIONS):
        raise EntityValidationError(
            f"Invalid sort_by parameter. Valid options: {', '.join(VALID_SORT_OPTIONS)}",
            "sort_by",
        )
    return await service.get_top_categories(count, sort_by)


@router.get("/trends", response_model=List[CategoryTrendDto])
async def get_category_trends(
    days_period: int = 30,
    count: int = 10,
    service: CategoryAnalyticsService = Depends(get_category_analytics_service),
) -> List[CategoryTrendDto]:
    """Trending categories based on products added in the period."""
    if days_period < 7 or days_period > 365:
        raise EntityValidationError("Days period must be between 7 and 365", "days_period")
    if count <= 0 or count > 20:
        raise EntityValidationError("Count must be between 1 and 20", "count")
    return await service.get_category_trends(days_period, count)


@router.get("/distribution", response_model=List[CategoryInventoryDistributionDto])
async def get_inventory_distribution(
    service: CategoryAnalyticsService = Depends(get_category_analytics_service),
) -> List[CategoryInventoryDistributionDto]:
    return await service.get_category_inventory_distribution()


@router.get("/stock-issues", response_model=List[CategoryAnalyticsDto])
async def get_categories_with_stock_issues(
    low_stock_threshold: Optional[int] = None,
    settings: Settings = Depends(get_app_settings),
    service: CategoryAnalyticsService = Depends(get_category_analytics_service),
) -> List[CategoryAnalyticsDto]:
    if low_stock_threshold is None:
        low_stock_threshold = settings.low_stock_threshold
    if low_stock_threshold < 1 or low_stock_threshold > 100:
        raise EntityValidationError(
            "Low stock threshold must be between 1 and 100", "low_stock_threshold"
        )
    return await service.get_categories_with_stock_issues(low_stock_threshold)


@router.get("/summary", response_model=AnalyticsSummaryDto)
async def get_analytics_summary(
    service: CategoryAnalyticsService = Depends(get_category_analytics_service),
) -> AnalyticsSummaryDto:
    """Key metrics for dashboard display."""
    return await service.get_analytics_summary()


@router.get("/{category_id}", response_model=CategoryAnalyticsDto)
async def get_category_analytics_by_id(
    category_id: int,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    service: CategoryAnalyticsService = Depends(get_category_analytics_service),
) -> CategoryAnalyticsDto:
    if category_id <= 0:
        raise EntityValidationError("Category ID must be greater than 0", "category_id")
    _check_date_range(start_date, end_date)

    analytics = await service.get_category_analytics_by_id(
        category_id, AnalyticsDateRangeDto(start_date=start_date, end_date=end_date)
    )
    if analytics is None:
        raise CategoryNotFoundError(category_id)
    return analytics
