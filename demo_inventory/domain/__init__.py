"""
Domain Module

Entities with validated properties, analytics records and repository contracts.
"""
from .analytics import CategoryAnalyticsData, CategoryTrendData, OverallCategoryMetrics
from .category import Category
from .exceptions import (
    CategoryNotFoundError,
    DuplicateSkuError,
    EntityValidationError,
    InventoryError,
    ProductNotFoundError,
)
from .product import Product
from .user import User

__all__ = [
    "Category",
    "CategoryAnalyticsData",
    "CategoryNotFoundError",
    "CategoryTrendData",
    "DuplicateSkuError",
    "EntityValidationError",
    "InventoryError",
    "OverallCategoryMetrics",
    "Product",
    "ProductNotFoundError",
    "User",
]
