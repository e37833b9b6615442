"""
Demo Catalog Seeding

Loads a generated catalog through the repositories, so the same code seeds
the in-memory store at startup and the PostgreSQL database from the
command line:

    python -m demo_inventory.data.seed --products 200
"""

import argparse
import asyncio
from typing import Optional, Tuple

import structlog

from demo_inventory.config import get_settings
from demo_inventory.config.logging import configure_logging
from demo_inventory.data.generators import CatalogGenerator
from demo_inventory.database.connection import close_database, get_db, init_database
from demo_inventory.domain.repositories import CategoryRepository, ProductRepository
from demo_inventory.infrastructure import SqlCategoryRepository, SqlProductRepository

logger = structlog.get_logger(__name__)


async def seed_catalog(
    categories: CategoryRepository,
    products: ProductRepository,
    n_products: int = 50,
    generator: Optional[CatalogGenerator] = None,
) -> Tuple[int, int]:
    """
    Insert the demo categories and n_products generated products.

    Existing categories (by name) are reused and products whose SKU is
    already taken are skipped, so seeding twice does not fail.

    Returns:
        (number of categories available, number of products inserted)
    """
    generator = generator or CatalogGenerator()

    stored = []
    for category in generator.generate_categories():
        existing = await categories.get_by_name(category.name)
        stored.append(existing or await categories.add(category))

    inserted = 0
    for product in generator.generate_products(stored, n_products):
        if await products.get_by_sku(product.sku) is not None:
            continue
        await products.add(product)
        inserted += 1

    logger.info("Catalog seeded", categories=len(stored), products=inserted)
    return len(stored), inserted


async def main(n_products: int) -> None:
    settings = get_settings()
    configure_logging(settings=settings)

    logger.info("Starting database seeding...", products=n_products)
    await init_database(settings)
    try:
        async with get_db() as session:
            await seed_catalog(SqlCategoryRepository(session), SqlProductRepository(session), n_products)
        logger.info("Database seeding completed successfully!")
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        raise
    finally:
        await close_database()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the inventory database with demo data")
    parser.add_argument("--products", type=int, default=50, help="Number of products (default: 50)")
    args = parser.parse_args()

    asyncio.run(main(args.products))
