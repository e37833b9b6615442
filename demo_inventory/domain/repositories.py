"""
Repository Interfaces

Abstract contracts for data access. Concrete implementations live in the
infrastructure layer (in-memory and SQLAlchemy).
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from demo_inventory.domain.analytics import (
    CategoryAnalyticsData,
    CategoryTrendData,
    OverallCategoryMetrics,
)
from demo_inventory.domain.category import Category
from demo_inventory.domain.product import Product
from demo_inventory.domain.user import User


class ProductRepository(ABC):
    """Persistence operations for products"""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        ...

    @abstractmethod
    async def get_all(self) -> List[Product]:
        ...

    @abstractmethod
    async def add(self, product: Product) -> Product:
        """
        Persist a new product.

        Args:
            product: Product entity to store; its id is assigned here

        Returns:
            The stored product
        """

    @abstractmethod
    async def update(self, product: Product) -> Product:
        """
        Persist changes to an existing product.

        Raises:
            ProductNotFoundError: If no product has product.id
        """

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        """Remove a product. Returns False when nothing was removed."""

    @abstractmethod
    async def get_by_sku(self, sku: str) -> Optional[Product]:
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Product]:
        """Exact, case-insensitive name lookup"""

    @abstractmethod
    async def get_by_price_range(self, min_price: Decimal, max_price: Decimal) -> List[Product]:
        """Products priced inside the inclusive range"""

    @abstractmethod
    async def search_by_name(self, name: str) -> List[Product]:
        """Case-insensitive substring search on product names"""


class CategoryRepository(ABC):
    """Persistence operations for categories"""

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Optional[Category]:
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Category]:
        ...

    @abstractmethod
    async def get_all(self) -> List[Category]:
        ...

    @abstractmethod
    async def add(self, category: Category) -> Category:
        ...


class UserRepository(ABC):
    """Persistence operations for users"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    async def get_all(self) -> List[User]:
        ...

    @abstractmethod
    async def add(self, user: User) -> User:
        ...

    @abstractmethod
    async def update(self, user: User) -> User:
        ...

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        ...

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get_active_users(self) -> List[User]:
        ...

    @abstractmethod
    async def search_by_name(self, name: str) -> List[User]:
        """Case-insensitive match on first, last or full name"""


class CategoryAnalyticsRepository(ABC):
    """Read-only analytics queries over categories and their products"""

    @abstractmethod
    async def get_category_analytics(
        self,
        include_empty_categories: bool = True,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        low_stock_threshold: int = 10,
    ) -> List[CategoryAnalyticsData]:
        """
        Analytics for all categories.

        Args:
            include_empty_categories: Whether to include categories with no products
            start_date: Optional lower bound on product creation time
            end_date: Optional upper bound on product creation time
            low_stock_threshold: Quantities below this count as low stock
        """

    @abstractmethod
    async def get_category_analytics_by_id(
        self,
        category_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Optional[CategoryAnalyticsData]:
        ...

    @abstractmethod
    async def get_top_categories_by_product_count(self, count: int = 10) -> List[CategoryAnalyticsData]:
        ...

    @abstractmethod
    async def get_top_categories_by_inventory_value(self, count: int = 10) -> List[CategoryAnalyticsData]:
        ...

    @abstractmethod
    async def get_categories_with_low_stock(self, low_stock_threshold: int = 10) -> List[CategoryAnalyticsData]:
        """Categories having at least one product with quantity <= threshold"""

    @abstractmethod
    async def get_overall_category_metrics(self) -> OverallCategoryMetrics:
        ...

    @abstractmethod
    async def get_category_trends(self, days_period: int = 30) -> List[CategoryTrendData]:
        ...
