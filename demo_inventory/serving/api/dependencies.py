"""
API Dependencies

Wires services to a storage backend per request:

- In-memory mode: one InMemoryStore per application, kept on app.state
- SQL mode: one AsyncSession per request, committed on success
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from demo_inventory.application import CategoryAnalyticsService, CategoryService, ProductService
from demo_inventory.config import Settings
from demo_inventory.database.connection import get_db
from demo_inventory.domain.repositories import (
    CategoryAnalyticsRepository,
    CategoryRepository,
    ProductRepository,
)
from demo_inventory.infrastructure import (
    InMemoryCategoryAnalyticsRepository,
    InMemoryCategoryRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
    SqlCategoryAnalyticsRepository,
    SqlCategoryRepository,
    SqlProductRepository,
)


class InMemoryStore:
    """Process-wide in-memory repositories sharing one data set"""

    def __init__(self):
        self.products = InMemoryProductRepository()
        self.categories = InMemoryCategoryRepository()
        self.users = InMemoryUserRepository()
        self.analytics = InMemoryCategoryAnalyticsRepository(self.products, self.categories)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> Optional[InMemoryStore]:
    return request.app.state.store


async def get_session(
    store: Optional[InMemoryStore] = Depends(get_store),
) -> AsyncGenerator[Optional[AsyncSession], None]:
    """Request-scoped database session (None in in-memory mode)"""
    if store is not None:
        yield None
        return
    async with get_db() as session:
        yield session


def get_product_repository(
    store: Optional[InMemoryStore] = Depends(get_store),
    session: Optional[AsyncSession] = Depends(get_session),
) -> ProductRepository:
    return store.products if store is not None else SqlProductRepository(session)


def get_category_repository(
    store: Optional[InMemoryStore] = Depends(get_store),
    session: Optional[AsyncSession] = Depends(get_session),
) -> CategoryRepository:
    return store.categories if store is not None else SqlCategoryRepository(session)


def get_category_analytics_repository(
    store: Optional[InMemoryStore] = Depends(get_store),
    session: Optional[AsyncSession] = Depends(get_session),
) -> CategoryAnalyticsRepository:
    return store.analytics if store is not None else SqlCategoryAnalyticsRepository(session)


def get_product_service(
    products: ProductRepository = Depends(get_product_repository),
    categories: CategoryRepository = Depends(get_category_repository),
) -> ProductService:
    return ProductService(products, categories)


def get_category_service(
    categories: CategoryRepository = Depends(get_category_repository),
) -> CategoryService:
    return CategoryService(categories)


def get_category_analytics_service(
    repository: CategoryAnalyticsRepository = Depends(get_category_analytics_repository),
) -> CategoryAnalyticsService:
    return CategoryAnalyticsService(repository)
