"""
Database Models

SQLAlchemy tables backing the PostgreSQL repositories:

- categories: product categories (unique name)
- products: product catalog (unique SKU, optional category)

Rows are mapped to and from the domain entities by the repositories, so the
entity validation rules still apply to everything read or written here.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


class CategoryRecord(Base):
    """Category table"""
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    products: Mapped[List["ProductRecord"]] = relationship(back_populates="category")

    __table_args__ = (
        Index("ix_categories_name", "name", unique=True),
    )


class ProductRecord(Base):
    """Product table"""
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), default="", nullable=False)
    sku: Mapped[str] = mapped_column(String(50), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity_in_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    category: Mapped[Optional[CategoryRecord]] = relationship(back_populates="products")

    __table_args__ = (
        Index("ix_products_sku", "sku", unique=True),
        Index("ix_products_name", "name"),
        Index("ix_products_category_id", "category_id"),
    )
