"""
Infrastructure Module

In-memory and SQLAlchemy implementations of the domain repositories.
"""
from .analytics import InMemoryCategoryAnalyticsRepository, SqlCategoryAnalyticsRepository
from .memory import InMemoryCategoryRepository, InMemoryProductRepository, InMemoryUserRepository
from .sql import SqlCategoryRepository, SqlProductRepository

__all__ = [
    "InMemoryCategoryAnalyticsRepository",
    "InMemoryCategoryRepository",
    "InMemoryProductRepository",
    "InMemoryUserRepository",
    "SqlCategoryAnalyticsRepository",
    "SqlCategoryRepository",
    "SqlProductRepository",
]
