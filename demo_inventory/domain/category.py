"""
Category Entity
"""

from datetime import datetime
from typing import Optional

from demo_inventory.domain.exceptions import EntityValidationError
from demo_inventory.domain.product import utc_now


class Category:
    """A product category; products reference it through category_id"""

    def __init__(
        self,
        name: str,
        description: Optional[str] = "",
        id: int = 0,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.name = name
        self.description = description
        now = utc_now()
        self.created_at = created_at or now
        self.updated_at = updated_at or now

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if value is None or not value.strip():
            raise EntityValidationError("Category name cannot be null or empty.", "name")
        if len(value) > 100:
            raise EntityValidationError("Category name cannot exceed 100 characters.", "name")
        self._name = value.strip()

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: Optional[str]) -> None:
        if value is not None and len(value) > 500:
            raise EntityValidationError("Category description cannot exceed 500 characters.", "description")
        self._description = (value or "").strip()

    def validate(self) -> None:
        """Re-run every property validation on the current values."""
        self.name = self._name
        self.description = self._description

    def __repr__(self) -> str:
        return f"Category(id={self.id!r}, name={self._name!r})"
