"""
Unit Tests - Demo Catalog Generation and Seeding
"""
from datetime import datetime, timezone

from demo_inventory.data import CatalogGenerator
from demo_inventory.data.generators import CATEGORIES
from demo_inventory.data.seed import seed_catalog


class TestCatalogGenerator:
    """Tests for the synthetic catalog"""

    def test_one_category_per_department(self):
        categories = CatalogGenerator().generate_categories()

        assert [c.name for c in categories] == [c[0] for c in CATEGORIES]

    def test_products_are_valid_and_assigned(self):
        generator = CatalogGenerator()
        categories = generator.generate_categories()
        for i, category in enumerate(categories, start=1):
            category.id = i

        products = generator.generate_products(categories, n=100)

        assert len(products) == 100
        assert len({p.sku for p in products}) == 100
        assert all(p.category_id in range(1, 7) for p in products)
        assert all(p.price > 0 for p in products)
        assert all(p.created_at <= datetime.now(timezone.utc) for p in products)

    def test_same_seed_same_catalog(self):
        def skus(seed):
            generator = CatalogGenerator(seed=seed)
            categories = generator.generate_categories()
            for i, category in enumerate(categories, start=1):
                category.id = i
            return [p.sku for p in generator.generate_products(categories, n=10)]

        assert skus(7) == skus(7)

    def test_no_categories_no_products(self):
        assert CatalogGenerator().generate_products([], n=10) == []


class TestSeedCatalog:
    """Tests for loading the catalog through the repositories"""

    async def test_seed_in_memory(self, product_repository, category_repository):
        n_categories, inserted = await seed_catalog(category_repository, product_repository, n_products=25)

        assert n_categories == len(CATEGORIES)
        assert inserted == 25
        assert len(await product_repository.get_all()) == 25

    async def test_seeding_twice_reuses_categories(self, product_repository, category_repository):
        await seed_catalog(category_repository, product_repository, n_products=10)

        _, inserted = await seed_catalog(category_repository, product_repository, n_products=10)

        assert len(await category_repository.get_all()) == len(CATEGORIES)
        # Same default seed, same SKUs
        assert inserted == 0
        assert len(await product_repository.get_all()) == 10

    async def test_seeded_catalog_has_analytics(self, product_repository, category_repository,
                                                analytics_repository):
        await seed_catalog(category_repository, product_repository, n_products=60)

        metrics = await analytics_repository.get_overall_category_metrics()

        assert metrics.total_categories == len(CATEGORIES)
        assert metrics.total_products == 60
        assert metrics.total_inventory_value > 0
