"""
Products API Endpoints

REST API for the product catalog. Reads are public; create, update and
delete require an X-API-Key header.
"""

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from demo_inventory.application import ProductService
from demo_inventory.application.schemas import (
    CreateProductDto,
    PriceRangeDto,
    ProductDto,
    UpdateProductDto,
)
from demo_inventory.domain.exceptions import EntityValidationError, ProductNotFoundError
from demo_inventory.serving.api.dependencies import get_product_service
from demo_inventory.serving.api.security import require_api_key

router = APIRouter()

MAX_PRODUCT_ID = 2_000_000_000


def _not_blank(value: str, message: str, field: str) -> str:
    if not value.strip():
        raise EntityValidationError(message, field)
    return value


@router.get("", response_model=List[ProductDto])
async def list_products(
    service: ProductService = Depends(get_product_service),
) -> List[ProductDto]:
    """List every product."""
    return await service.get_all_products()


@router.get("/search", response_model=List[ProductDto])
async def search_products(
    search_term: Optional[str] = Query(None, max_length=200),
    service: ProductService = Depends(get_product_service),
) -> List[ProductDto]:
    """Case-insensitive name search; a blank term returns everything."""
    return await service.search_products(search_term)


@router.get("/price-range", response_model=List[ProductDto])
async def get_products_by_price_range(
    min_price: Decimal = Query(Decimal("0"), ge=0),
    max_price: Decimal = Query(..., ge=0),
    service: ProductService = Depends(get_product_service),
) -> List[ProductDto]:
    """Products priced inside the inclusive range."""
    return await service.get_products_by_price_range(
        PriceRangeDto(min_price=min_price, max_price=max_price)
    )


@router.get("/sku/{sku}", response_model=ProductDto)
async def get_product_by_sku(
    sku: str = Path(..., min_length=1, max_length=50),
    service: ProductService = Depends(get_product_service),
) -> ProductDto:
    _not_blank(sku, "SKU cannot be null or empty.", "sku")
    product = await service.get_product_by_sku(sku)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product with SKU '{sku}' not found")
    return product


@router.get("/name/{name}", response_model=ProductDto)
async def get_product_by_name(
    name: str = Path(..., min_length=1, max_length=200),
    service: ProductService = Depends(get_product_service),
) -> ProductDto:
    _not_blank(name, "Product name cannot be null or empty.", "name")
    product = await service.get_product_by_name(name)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product with name '{name}' not found")
    return product


@router.get("/{product_id}", response_model=ProductDto)
async def get_product(
    product_id: int = Path(..., ge=1, le=MAX_PRODUCT_ID),
    service: ProductService = Depends(get_product_service),
) -> ProductDto:
    product = await service.get_product_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


@router.post(
    "",
    response_model=ProductDto,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
async def create_product(
    payload: CreateProductDto,
    response: Response,
    service: ProductService = Depends(get_product_service),
) -> ProductDto:
    """Create a product. The SKU is stored trimmed and upper-cased."""
    product = await service.create_product(payload)
    response.headers["Location"] = f"/api/products/{product.id}"
    return product


@router.put("/{product_id}", response_model=ProductDto, dependencies=[Depends(require_api_key)])
async def update_product(
    payload: UpdateProductDto,
    product_id: int = Path(..., ge=1, le=MAX_PRODUCT_ID),
    service: ProductService = Depends(get_product_service),
) -> ProductDto:
    return await service.update_product(product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_api_key)],
)
async def delete_product(
    product_id: int = Path(..., ge=1, le=MAX_PRODUCT_ID),
    service: ProductService = Depends(get_product_service),
) -> Response:
    if not await service.delete_product(product_id):
        raise ProductNotFoundError(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
