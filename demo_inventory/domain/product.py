"""
Product Entity

A product in the inventory. Every settable property validates and
normalizes its value on assignment, so a Product instance can never hold
a name, SKU, price or stock quantity that breaks the catalog rules.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from demo_inventory.domain.exceptions import EntityValidationError

NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
SKU_MAX_LENGTH = 50
PRICE_MIN = Decimal("0")
PRICE_MAX = Decimal("999999.99")

SKU_PATTERN = re.compile(r"[A-Z0-9\-]+")

Number = Union[Decimal, int, float, str]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def normalize_sku(value: str) -> str:
    """Trim and upper-case a SKU the same way the entity stores it"""
    return value.strip().upper()


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _to_decimal(value: Number, field: str) -> Decimal:
    if isinstance(value, bool):
        raise EntityValidationError("Price must be a number.", field)
    try:
        # str() first so floats keep their printed value (29.99, not 29.9899...)
        price = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise EntityValidationError("Price must be a number.", field)
    if not price.is_finite():
        raise EntityValidationError("Price must be a number.", field)
    return price


class Product:
    """Represents a product in the inventory system"""

    def __init__(
        self,
        name: str,
        sku: str,
        price: Number,
        quantity_in_stock: int = 0,
        description: Optional[str] = "",
        id: int = 0,
        category_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.name = name
        self.description = description
        self.sku = sku
        self.price = price
        self.quantity_in_stock = quantity_in_stock
        self.category_id = category_id
        now = utc_now()
        self.created_at = created_at or now
        self.updated_at = updated_at or now

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if _is_blank(value):
            raise EntityValidationError("Product name cannot be null or empty.", "name")
        if len(value) > NAME_MAX_LENGTH:
            raise EntityValidationError("Product name cannot exceed 200 characters.", "name")
        self._name = value.strip()

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: Optional[str]) -> None:
        value = value or ""
        if len(value) > DESCRIPTION_MAX_LENGTH:
            raise EntityValidationError("Description cannot exceed 1000 characters.", "description")
        self._description = value

    @property
    def sku(self) -> str:
        return self._sku

    @sku.setter
    def sku(self, value: str) -> None:
        if _is_blank(value):
            raise EntityValidationError("SKU cannot be null or empty.", "sku")
        if len(value) > SKU_MAX_LENGTH:
            raise EntityValidationError("SKU cannot exceed 50 characters.", "sku")
        normalized = normalize_sku(value)
        if not SKU_PATTERN.fullmatch(normalized):
            raise EntityValidationError(
                "SKU must contain only uppercase letters, numbers, and hyphens.", "sku"
            )
        self._sku = normalized

    @property
    def price(self) -> Decimal:
        return self._price

    @price.setter
    def price(self, value: Number) -> None:
        price = _to_decimal(value, "price")
        if price < PRICE_MIN:
            raise EntityValidationError("Price cannot be negative.", "price")
        if price > PRICE_MAX:
            raise EntityValidationError("Price cannot exceed 999,999.99.", "price")
        self._price = price

    @property
    def quantity_in_stock(self) -> int:
        return self._quantity_in_stock

    @quantity_in_stock.setter
    def quantity_in_stock(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise EntityValidationError("Quantity in stock must be a whole number.", "quantity_in_stock")
        if value < 0:
            raise EntityValidationError("Quantity in stock cannot be negative.", "quantity_in_stock")
        self._quantity_in_stock = value

    @property
    def inventory_value(self) -> Decimal:
        """Stock value of this product (price x quantity)"""
        return self._price * self._quantity_in_stock

    def validate(self) -> None:
        """
        Re-run every property validation on the current values.

        Raises:
            EntityValidationError: On the first property that violates its rule
        """
        self.name = self._name
        self.description = self._description
        self.sku = self._sku
        self.price = self._price
        self.quantity_in_stock = self._quantity_in_stock

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, sku={self._sku!r}, name={self._name!r})"
