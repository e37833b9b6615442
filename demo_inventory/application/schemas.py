"""
Data Transfer Objects

Flat, serialization-only request and response models. They are distinct
from the domain entities: services map between the two.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

# Decimals travel as JSON numbers, not strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def price_from_float(value: Any) -> Any:
    """JSON numbers arrive as floats; keep their printed value (29.99, not 29.9899...)"""
    return Decimal(str(value)) if isinstance(value, float) else value


PriceInput = Annotated[Decimal, BeforeValidator(price_from_float)]


# =============================================================================
# PRODUCTS
# =============================================================================

class ProductDto(BaseModel):
    """Complete product representation"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    sku: str
    price: Money
    quantity_in_stock: int
    category_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class CreateProductDto(BaseModel):
    """Payload for creating a product"""
    name: str = Field(..., min_length=1, max_length=200, examples=["Sample Product"])
    description: str = Field(default="", max_length=1000, examples=["This is a sample product description"])
    sku: str = Field(..., min_length=3, max_length=50, examples=["SKU-001"])
    price: PriceInput = Field(..., ge=Decimal("0.01"), decimal_places=2, examples=[19.99])
    quantity_in_stock: int = Field(..., ge=0, examples=[100])
    category_id: Optional[int] = Field(default=None, ge=1)


class UpdateProductDto(BaseModel):
    """Payload for updating a product; the SKU cannot change"""
    name: str = Field(..., min_length=1, max_length=200, examples=["Updated Product Name"])
    description: str = Field(default="", max_length=1000)
    price: PriceInput = Field(..., ge=Decimal("0.01"), decimal_places=2, examples=[24.99])
    quantity_in_stock: int = Field(..., ge=0, examples=[150])


class PriceRangeDto(BaseModel):
    """Inclusive price range"""
    min_price: Decimal = Field(default=Decimal("0"), ge=0)
    max_price: Decimal = Field(..., ge=0)


# =============================================================================
# CATEGORIES
# =============================================================================

class CategoryDto(BaseModel):
    """Category representation"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


class CreateCategoryDto(BaseModel):
    """Payload for creating a category"""
    name: str = Field(..., min_length=1, max_length=100, examples=["Electronics"])
    description: str = Field(default="", max_length=500)


# =============================================================================
# CATEGORY ANALYTICS
# =============================================================================

class CategoryAnalyticsDto(BaseModel):
    """Analytics for a single category"""
    category_id: int
    category_name: str
    category_description: str = ""
    total_products: int = 0
    total_stock_quantity: int = 0
    average_price: Money = Decimal("0")
    min_price: Money = Decimal("0")
    max_price: Money = Decimal("0")
    total_inventory_value: Money = Decimal("0")
    inventory_value_percentage: Money = Field(
        default=Decimal("0"),
        description="Share of the total inventory value this category represents",
    )
    low_stock_products: int = 0
    out_of_stock_products: int = 0


class CategoryMetricsDto(BaseModel):
    """Overall metrics plus per-category analytics"""
    total_categories: int
    total_products: int
    total_inventory_value: Money
    average_products_per_category: Money
    categories_with_products: int
    empty_categories: int
    category_analytics: List[CategoryAnalyticsDto] = Field(default_factory=list)


class CategoryTrendDto(BaseModel):
    """Trend data for a category (trend_rank 1 = highest trending)"""
    category_id: int
    category_name: str
    trend_score: Money
    trend_rank: int
    product_growth_rate: Money
    inventory_turnover: Money


class CategoryInventoryDistributionDto(BaseModel):
    """A category's share of products, inventory value and stock"""
    category_id: int
    category_name: str
    product_percentage: Money
    value_percentage: Money
    stock_percentage: Money


class AnalyticsDateRangeDto(BaseModel):
    """Filters for category analytics"""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    include_only_active_categories: bool = True
    low_stock_threshold: int = Field(default=10, ge=0)


class CategoryValueDto(BaseModel):
    category_name: str
    total_inventory_value: Money


class AnalyticsSummaryDto(BaseModel):
    """Key metrics for dashboard display"""
    total_categories: int
    total_products: int
    total_inventory_value: Money
    categories_with_products: int
    empty_categories: int
    average_products_per_category: Money
    top_categories_by_value: List[CategoryValueDto]
    categories_with_stock_issues: int
    last_updated: datetime
