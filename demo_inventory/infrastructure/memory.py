"""
In-Memory Repositories

Process-local lists with manually incremented id counters. There is no
locking: a single store is only safe for one event loop in one process.
"""

from decimal import Decimal
from typing import List, Optional

from demo_inventory.domain.category import Category
from demo_inventory.domain.exceptions import ProductNotFoundError
from demo_inventory.domain.product import Product
from demo_inventory.domain.repositories import (
    CategoryRepository,
    ProductRepository,
    UserRepository,
)
from demo_inventory.domain.user import User


class InMemoryProductRepository(ProductRepository):
    """Product repository backed by a Python list"""

    def __init__(self):
        self._products: List[Product] = []
        self._next_id = 1

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    async def get_all(self) -> List[Product]:
        return list(self._products)

    async def add(self, product: Product) -> Product:
        product.id = self._next_id
        self._next_id += 1
        self._products.append(product)
        return product

    async def update(self, product: Product) -> Product:
        existing = await self.get_by_id(product.id)
        if existing is None:
            raise ProductNotFoundError(product.id)

        existing.name = product.name
        existing.description = product.description
        existing.price = product.price
        existing.quantity_in_stock = product.quantity_in_stock
        existing.category_id = product.category_id
        existing.updated_at = product.updated_at
        return existing

    async def delete(self, product_id: int) -> bool:
        product = await self.get_by_id(product_id)
        if product is None:
            return False
        self._products.remove(product)
        return True

    async def get_by_sku(self, sku: str) -> Optional[Product]:
        return next((p for p in self._products if p.sku == sku), None)

    async def get_by_name(self, name: str) -> Optional[Product]:
        wanted = name.casefold()
        return next((p for p in self._products if p.name.casefold() == wanted), None)

    async def get_by_price_range(self, min_price: Decimal, max_price: Decimal) -> List[Product]:
        return [p for p in self._products if min_price <= p.price <= max_price]

    async def search_by_name(self, name: str) -> List[Product]:
        term = name.casefold()
        return [p for p in self._products if term in p.name.casefold()]


class InMemoryCategoryRepository(CategoryRepository):
    """Category repository backed by a Python list"""

    def __init__(self):
        self._categories: List[Category] = []
        self._next_id = 1

    async def get_by_id(self, category_id: int) -> Optional[Category]:
        return next((c for c in self._categories if c.id == category_id), None)

    async def get_by_name(self, name: str) -> Optional[Category]:
        wanted = name.strip().casefold()
        return next((c for c in self._categories if c.name.casefold() == wanted), None)

    async def get_all(self) -> List[Category]:
        return list(self._categories)

    async def add(self, category: Category) -> Category:
        category.id = self._next_id
        self._next_id += 1
        self._categories.append(category)
        return category


class InMemoryUserRepository(UserRepository):
    """User repository backed by a Python list"""

    def __init__(self):
        self._users: List[User] = []
        self._next_id = 1

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return next((u for u in self._users if u.id == user_id), None)

    async def get_all(self) -> List[User]:
        return list(self._users)

    async def add(self, user: User) -> User:
        user.id = self._next_id
        self._next_id += 1
        self._users.append(user)
        return user

    async def update(self, user: User) -> User:
        existing = await self.get_by_id(user.id)
        if existing is None:
            raise LookupError(f"User with ID {user.id} not found")

        existing.username = user.username
        existing.email = user.email
        existing.first_name = user.first_name
        existing.last_name = user.last_name
        existing.is_active = user.is_active
        existing.updated_at = user.updated_at
        return existing

    async def delete(self, user_id: int) -> bool:
        user = await self.get_by_id(user_id)
        if user is None:
            return False
        self._users.remove(user)
        return True

    async def get_by_username(self, username: str) -> Optional[User]:
        wanted = username.strip().lower()
        return next((u for u in self._users if u.username == wanted), None)

    async def get_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        return next((u for u in self._users if u.email == wanted), None)

    async def get_active_users(self) -> List[User]:
        return [u for u in self._users if u.is_active]

    async def search_by_name(self, name: str) -> List[User]:
        term = name.casefold()
        return [
            u for u in self._users
            if term in u.first_name.casefold()
            or term in u.last_name.casefold()
            or term in u.full_name.casefold()
        ]
