"""
Domain Exceptions

Typed exceptions raised by entities, repositories and application services.
The API layer maps them onto HTTP status codes:

- EntityValidationError (and DuplicateSkuError) -> 400
- ProductNotFoundError / CategoryNotFoundError -> 404
"""

from typing import Optional


class InventoryError(Exception):
    """Base class for all inventory errors"""

    code = "INVENTORY_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        """Build the JSON error envelope returned by the API"""
        return {"error": {"code": self.code, "message": self.message}}


class EntityValidationError(InventoryError, ValueError):
    """An entity property was assigned a value that violates its constraints"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        if self.field:
            response["error"]["field"] = self.field
        return response


class DuplicateSkuError(EntityValidationError):
    """A product with the same normalized SKU already exists"""

    code = "DUPLICATE_SKU"

    def __init__(self, sku: str):
        super().__init__(
            f"SKU '{sku}' already exists. Each product must have a unique SKU.",
            field="sku",
        )
        self.sku = sku


class ProductNotFoundError(InventoryError, LookupError):
    """The requested product does not exist"""

    code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int):
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class CategoryNotFoundError(InventoryError, LookupError):
    """The requested category does not exist"""

    code = "CATEGORY_NOT_FOUND"

    def __init__(self, category_id: int):
        super().__init__(f"Category with ID {category_id} not found")
        self.category_id = category_id
