"""
Product Service

Catalog use cases on top of a ProductRepository. Entities never leave this
layer: every operation returns ProductDto instances.
"""

from typing import List, Optional

import structlog

from demo_inventory.application.schemas import (
    CreateProductDto,
    PriceRangeDto,
    ProductDto,
    UpdateProductDto,
)
from demo_inventory.domain.exceptions import (
    DuplicateSkuError,
    EntityValidationError,
    ProductNotFoundError,
)
from demo_inventory.domain.product import Product, normalize_sku, utc_now
from demo_inventory.domain.repositories import CategoryRepository, ProductRepository

logger = structlog.get_logger(__name__)


def to_product_dto(product: Product) -> ProductDto:
    return ProductDto.model_validate(product)


class ProductService:
    """Product catalog operations"""

    def __init__(
        self,
        repository: ProductRepository,
        categories: Optional[CategoryRepository] = None,
    ):
        if repository is None:
            raise ValueError("repository is required")
        self._repository = repository
        self._categories = categories

    async def get_product_by_id(self, product_id: int) -> Optional[ProductDto]:
        product = await self._repository.get_by_id(product_id)
        return to_product_dto(product) if product else None

    async def get_all_products(self) -> List[ProductDto]:
        return [to_product_dto(p) for p in await self._repository.get_all()]

    async def create_product(self, dto: CreateProductDto) -> ProductDto:
        """
        Create a product.

        The entity is built first so the SKU is normalized before the
        uniqueness check ("sku-1" and "SKU-1" collide).

        Raises:
            EntityValidationError: If a field breaks an entity rule or the
                category does not exist
            DuplicateSkuError: If another product already uses the SKU
        """
        product = Product(
            name=dto.name,
            description=dto.description,
            sku=dto.sku,
            price=dto.price,
            quantity_in_stock=dto.quantity_in_stock,
            category_id=dto.category_id,
        )

        if await self._repository.get_by_sku(product.sku) is not None:
            logger.warning("Duplicate SKU rejected", sku=product.sku)
            raise DuplicateSkuError(product.sku)

        if product.category_id is not None and self._categories is not None:
            if await self._categories.get_by_id(product.category_id) is None:
                raise EntityValidationError(
                    f"Category with ID {product.category_id} does not exist.", "category_id"
                )

        now = utc_now()
        product.created_at = now
        product.updated_at = now

        created = await self._repository.add(product)
        logger.info("Product created", product_id=created.id, sku=created.sku)
        return to_product_dto(created)

    async def update_product(self, product_id: int, dto: UpdateProductDto) -> ProductDto:
        """
        Update name, description, price and stock of an existing product.

        Raises:
            ProductNotFoundError: If no product has the given id
            EntityValidationError: If a field breaks an entity rule
        """
        existing = await self._repository.get_by_id(product_id)
        if existing is None:
            raise ProductNotFoundError(product_id)

        # Validated as a whole before anything stored is touched
        changes = Product(
            id=existing.id,
            name=dto.name,
            description=dto.description,
            sku=existing.sku,
            price=dto.price,
            quantity_in_stock=dto.quantity_in_stock,
            category_id=existing.category_id,
            created_at=existing.created_at,
            updated_at=utc_now(),
        )

        updated = await self._repository.update(changes)
        logger.info("Product updated", product_id=updated.id)
        return to_product_dto(updated)

    async def delete_product(self, product_id: int) -> bool:
        deleted = await self._repository.delete(product_id)
        if deleted:
            logger.info("Product deleted", product_id=product_id)
        return deleted

    async def get_product_by_sku(self, sku: str) -> Optional[ProductDto]:
        product = await self._repository.get_by_sku(normalize_sku(sku))
        return to_product_dto(product) if product else None

    async def get_product_by_name(self, name: str) -> Optional[ProductDto]:
        product = await self._repository.get_by_name(name.strip())
        return to_product_dto(product) if product else None

    async def search_products(self, search_term: Optional[str]) -> List[ProductDto]:
        # Blank term lists the whole catalog
        if not search_term or not search_term.strip():
            return await self.get_all_products()
        products = await self._repository.search_by_name(search_term.strip())
        return [to_product_dto(p) for p in products]

    async def get_products_by_price_range(self, price_range: PriceRangeDto) -> List[ProductDto]:
        if price_range.min_price > price_range.max_price:
            raise EntityValidationError(
                "Minimum price cannot exceed maximum price.", "min_price"
            )
        products = await self._repository.get_by_price_range(
            price_range.min_price, price_range.max_price
        )
        return [to_product_dto(p) for p in products]
