"""
SQLAlchemy Repositories

PostgreSQL-backed repositories over an AsyncSession. Rows are mapped to
domain entities on the way out, so stored data is re-validated on read.
"""

from decimal import Decimal
from typing import List, Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from demo_inventory.database.models import CategoryRecord, ProductRecord
from demo_inventory.domain.analytics import ensure_utc
from demo_inventory.domain.category import Category
from demo_inventory.domain.exceptions import ProductNotFoundError
from demo_inventory.domain.product import Product, utc_now
from demo_inventory.domain.repositories import CategoryRepository, ProductRepository

logger = structlog.get_logger(__name__)


def product_from_record(record: ProductRecord) -> Product:
    """Map a products row onto a Product entity"""
    return Product(
        id=record.id,
        name=record.name,
        description=record.description,
        sku=record.sku,
        price=record.price,
        quantity_in_stock=record.quantity_in_stock,
        category_id=record.category_id,
        created_at=ensure_utc(record.created_at),
        updated_at=ensure_utc(record.updated_at),
    )


def category_from_record(record: CategoryRecord) -> Category:
    """Map a categories row onto a Category entity"""
    return Category(
        id=record.id,
        name=record.name,
        description=record.description,
        created_at=ensure_utc(record.created_at),
        updated_at=ensure_utc(record.updated_at),
    )


class SqlProductRepository(ProductRepository):
    """Product repository backed by the products table"""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        record = await self._session.get(ProductRecord, product_id)
        return product_from_record(record) if record else None

    async def get_all(self) -> List[Product]:
        result = await self._session.execute(select(ProductRecord).order_by(ProductRecord.id))
        return [product_from_record(r) for r in result.scalars().all()]

    async def add(self, product: Product) -> Product:
        record = ProductRecord(
            name=product.name,
            description=product.description,
            sku=product.sku,
            price=product.price,
            quantity_in_stock=product.quantity_in_stock,
            category_id=product.category_id,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
        self._session.add(record)
        await self._session.flush()

        product.id = record.id
        logger.debug("Product inserted", product_id=record.id, sku=record.sku)
        return product

    async def update(self, product: Product) -> Product:
        record = await self._session.get(ProductRecord, product.id)
        if record is None:
            raise ProductNotFoundError(product.id)

        record.name = product.name
        record.description = product.description
        record.price = product.price
        record.quantity_in_stock = product.quantity_in_stock
        record.category_id = product.category_id
        record.updated_at = utc_now()
        await self._session.flush()

        return product_from_record(record)

    async def delete(self, product_id: int) -> bool:
        record = await self._session.get(ProductRecord, product_id)
        if record is None:
            return False
        await self._session.delete(record)
        await self._session.flush()
        return True

    async def get_by_sku(self, sku: str) -> Optional[Product]:
        result = await self._session.execute(
            select(ProductRecord).where(ProductRecord.sku == sku)
        )
        record = result.scalar_one_or_none()
        return product_from_record(record) if record else None

    async def get_by_name(self, name: str) -> Optional[Product]:
        result = await self._session.execute(
            select(ProductRecord)
            .where(func.lower(ProductRecord.name) == name.lower())
            .order_by(ProductRecord.id)
            .limit(1)
        )
        record = result.scalar_one_or_none()
        return product_from_record(record) if record else None

    async def get_by_price_range(self, min_price: Decimal, max_price: Decimal) -> List[Product]:
        result = await self._session.execute(
            select(ProductRecord)
            .where(ProductRecord.price >= min_price, ProductRecord.price <= max_price)
            .order_by(ProductRecord.id)
        )
        return [product_from_record(r) for r in result.scalars().all()]

    async def search_by_name(self, name: str) -> List[Product]:
        result = await self._session.execute(
            select(ProductRecord)
            .where(ProductRecord.name.icontains(name, autoescape=True))
            .order_by(ProductRecord.id)
        )
        return [product_from_record(r) for r in result.scalars().all()]


class SqlCategoryRepository(CategoryRepository):
    """Category repository backed by the categories table"""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, category_id: int) -> Optional[Category]:
        record = await self._session.get(CategoryRecord, category_id)
        return category_from_record(record) if record else None

    async def get_by_name(self, name: str) -> Optional[Category]:
        result = await self._session.execute(
            select(CategoryRecord).where(func.lower(CategoryRecord.name) == name.strip().lower())
        )
        record = result.scalar_one_or_none()
        return category_from_record(record) if record else None

    async def get_all(self) -> List[Category]:
        result = await self._session.execute(select(CategoryRecord).order_by(CategoryRecord.id))
        return [category_from_record(r) for r in result.scalars().all()]

    async def add(self, category: Category) -> Category:
        record = CategoryRecord(
            name=category.name,
            description=category.description,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )
        self._session.add(record)
        await self._session.flush()

        category.id = record.id
        return category
