"""
Unit Tests - Product Service
"""
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from demo_inventory.application import ProductService
from demo_inventory.application.schemas import (
    CreateProductDto,
    PriceRangeDto,
    UpdateProductDto,
)
from demo_inventory.domain.category import Category
from demo_inventory.domain.exceptions import (
    DuplicateSkuError,
    EntityValidationError,
    ProductNotFoundError,
)


@pytest.fixture
def service(product_repository, category_repository) -> ProductService:
    return ProductService(product_repository, category_repository)


def create_dto(**overrides) -> CreateProductDto:
    fields = {
        "name": "Test",
        "sku": "test-001",
        "price": Decimal("29.99"),
        "quantity_in_stock": 100,
    }
    fields.update(overrides)
    return CreateProductDto(**fields)


class TestCreateProduct:
    """Tests for product creation"""

    async def test_create_normalizes_sku(self, service):
        """Test SKU is stored trimmed and upper-cased"""
        created = await service.create_product(create_dto())

        assert created.id == 1
        assert created.sku == "TEST-001"

    async def test_create_from_float_price(self, service):
        """Test a JSON-style float price keeps its printed value"""
        dto = CreateProductDto(name="Test", sku="test-001", price=29.99, quantity_in_stock=100)

        created = await service.create_product(dto)

        assert created.sku == "TEST-001"
        assert created.price == Decimal("29.99")

    async def test_create_then_fetch(self, service):
        """Test fetch by id returns what was created"""
        created = await service.create_product(create_dto(description="A test product"))

        fetched = await service.get_product_by_id(created.id)

        assert fetched is not None
        assert fetched.name == "Test"
        assert fetched.sku == "TEST-001"
        assert fetched.price == Decimal("29.99")
        assert fetched.quantity_in_stock == 100
        assert fetched.created_at == fetched.updated_at

    async def test_duplicate_sku_after_normalization(self, service):
        """Test SKUs differing only in case collide"""
        await service.create_product(create_dto(sku="dup-1"))

        with pytest.raises(DuplicateSkuError) as exc_info:
            await service.create_product(create_dto(sku="DUP-1"))

        assert exc_info.value.message == "SKU 'DUP-1' already exists. Each product must have a unique SKU."

    async def test_entity_rules_apply(self, service):
        """Test the entity rejects what the DTO lets through"""
        with pytest.raises(EntityValidationError):
            await service.create_product(create_dto(sku="bad_sku"))

    async def test_unknown_category_rejected(self, service):
        with pytest.raises(EntityValidationError) as exc_info:
            await service.create_product(create_dto(category_id=99))

        assert exc_info.value.field == "category_id"

    async def test_known_category_accepted(self, service, category_repository):
        category = await category_repository.add(Category(name="Tools"))

        created = await service.create_product(create_dto(category_id=category.id))

        assert created.category_id == category.id


class TestUpdateAndDelete:
    """Tests for update and delete"""

    async def test_update_changes_fields_but_not_sku(self, service):
        created = await service.create_product(create_dto())

        updated = await service.update_product(
            created.id,
            UpdateProductDto(name="Renamed", price=Decimal("5.00"), quantity_in_stock=3),
        )

        assert updated.name == "Renamed"
        assert updated.price == Decimal("5.00")
        assert updated.quantity_in_stock == 3
        assert updated.sku == "TEST-001"
        assert updated.updated_at >= created.updated_at

    async def test_rejected_update_leaves_product_unchanged(self, service):
        created = await service.create_product(create_dto())

        with pytest.raises(EntityValidationError):
            await service.update_product(
                created.id,
                UpdateProductDto(name="Renamed", price=Decimal("1000000.00"), quantity_in_stock=1),
            )

        fetched = await service.get_product_by_id(created.id)
        assert fetched.name == "Test"
        assert fetched.price == Decimal("29.99")

    async def test_update_missing_product(self, service):
        with pytest.raises(ProductNotFoundError, match="Product with ID 42 not found"):
            await service.update_product(
                42, UpdateProductDto(name="X", price=Decimal("1.00"), quantity_in_stock=1)
            )

    async def test_delete_then_fetch(self, service):
        created = await service.create_product(create_dto())

        assert await service.delete_product(created.id) is True
        assert await service.get_product_by_id(created.id) is None
        assert await service.delete_product(created.id) is False


class TestQueries:
    """Tests for lookups and search"""

    async def test_get_by_sku_normalizes_key(self, service):
        await service.create_product(create_dto())

        found = await service.get_product_by_sku(" test-001 ")

        assert found is not None
        assert found.sku == "TEST-001"

    async def test_get_by_name_is_case_insensitive(self, service):
        await service.create_product(create_dto(name="Blue Widget"))

        assert (await service.get_product_by_name("blue widget")) is not None
        assert await service.get_product_by_name("Blue") is None

    async def test_search_miss_returns_empty_list(self, service):
        await service.create_product(create_dto())

        assert await service.search_products("nonexistent") == []

    async def test_search_matches_substring(self, service):
        await service.create_product(create_dto(name="Blue Widget", sku="W-1"))
        await service.create_product(create_dto(name="Red Gadget", sku="G-1"))

        results = await service.search_products("WIDG")

        assert [p.sku for p in results] == ["W-1"]

    async def test_blank_search_returns_everything(self, service):
        await service.create_product(create_dto(sku="W-1"))
        await service.create_product(create_dto(sku="W-2"))

        assert len(await service.search_products("  ")) == 2

    async def test_price_range_is_inclusive(self, service):
        await service.create_product(create_dto(sku="P-1", price=Decimal("10.00")))
        await service.create_product(create_dto(sku="P-2", price=Decimal("20.00")))
        await service.create_product(create_dto(sku="P-3", price=Decimal("30.00")))

        results = await service.get_products_by_price_range(
            PriceRangeDto(min_price=Decimal("10.00"), max_price=Decimal("20.00"))
        )

        assert [p.sku for p in results] == ["P-1", "P-2"]

    async def test_inverted_price_range_rejected(self, service):
        with pytest.raises(EntityValidationError):
            await service.get_products_by_price_range(
                PriceRangeDto(min_price=Decimal("50"), max_price=Decimal("10"))
            )


class TestServiceConstruction:

    def test_repository_required(self):
        with pytest.raises(ValueError):
            ProductService(None)

    async def test_delegates_to_repository(self):
        """Test lookups go through the injected repository"""
        repository = AsyncMock()
        repository.get_by_id.return_value = None

        assert await ProductService(repository).get_product_by_id(7) is None
        repository.get_by_id.assert_awaited_once_with(7)
