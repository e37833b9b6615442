"""
Test Suite Configuration
"""
from decimal import Decimal
from typing import AsyncGenerator, Callable, Generator

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from demo_inventory.config import Settings
from demo_inventory.config.settings import SecuritySettings
from demo_inventory.database.models import Base
from demo_inventory.domain.category import Category
from demo_inventory.domain.product import Product
from demo_inventory.infrastructure import (
    InMemoryCategoryAnalyticsRepository,
    InMemoryCategoryRepository,
    InMemoryProductRepository,
)
from demo_inventory.serving.api import create_app

TEST_API_KEY = "test-api-key-0123456789"


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings (in-memory store, known API key)"""
    return Settings(
        app_env="testing",
        debug=True,
        use_in_memory_db=True,
        security=SecuritySettings(api_key=SecretStr(TEST_API_KEY)),
    )


@pytest.fixture
async def test_engine():
    """Create test database engine (single shared in-memory SQLite connection)"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session"""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def product_repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def category_repository() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository()


@pytest.fixture
def analytics_repository(product_repository, category_repository) -> InMemoryCategoryAnalyticsRepository:
    return InMemoryCategoryAnalyticsRepository(product_repository, category_repository)


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for valid products; keyword arguments override the defaults"""
    counter = {"n": 0}

    def _make(**overrides) -> Product:
        counter["n"] += 1
        fields = {
            "name": f"Product {counter['n']}",
            "sku": f"SKU-{counter['n']:04d}",
            "price": Decimal("10.00"),
            "quantity_in_stock": 50,
        }
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def make_category() -> Callable[..., Category]:
    counter = {"n": 0}

    def _make(**overrides) -> Category:
        counter["n"] += 1
        fields = {"name": f"Category {counter['n']}", "description": ""}
        fields.update(overrides)
        return Category(**fields)

    return _make


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """API test client with the lifespan running"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict:
    return {"X-API-Key": TEST_API_KEY}
