"""
Application Module

Use-case services and the DTOs they exchange with the API layer.
"""
from .category_analytics_service import CategoryAnalyticsService
from .category_service import CategoryService
from .product_service import ProductService

__all__ = [
    "CategoryAnalyticsService",
    "CategoryService",
    "ProductService",
]
