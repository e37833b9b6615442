"""
Synthetic Catalog Generator

Generates a realistic demo catalog for development and demos:
- Categories with subcategory-flavoured product names
- Products with category-based prices and a mix of healthy, low and
  zero stock levels
- Creation dates spread over the past years so trends have history
"""

import random
from datetime import timezone
from decimal import Decimal
from typing import List, Optional

from faker import Faker

from demo_inventory.domain.category import Category
from demo_inventory.domain.product import Product


# =============================================================================
# CONFIGURATION
# =============================================================================

CATEGORIES = [
    ("Electronics", "Phones, laptops and accessories", ["Phone", "Laptop", "Tablet", "Headphones", "Camera"], (50, 2000)),
    ("Clothing", "Apparel and footwear", ["Shirt", "Pants", "Dress", "Shoes", "Jacket"], (20, 500)),
    ("Home & Garden", "Furniture, kitchen and garden supplies", ["Chair", "Cookware", "Bedding", "Planter", "Lamp"], (30, 1000)),
    ("Sports", "Fitness and outdoor equipment", ["Dumbbell", "Tent", "Ball", "Wetsuit", "Bicycle"], (25, 800)),
    ("Beauty", "Skincare, makeup and fragrance", ["Serum", "Lipstick", "Shampoo", "Perfume", "Brush"], (10, 200)),
    ("Books", "Fiction, non-fiction and comics", ["Novel", "Guide", "Textbook", "Picture Book", "Comic"], (10, 50)),
]

# (weight, min quantity, max quantity)
STOCK_LEVELS = [
    (0.10, 0, 0),
    (0.15, 1, 9),
    (0.75, 10, 1000),
]


# =============================================================================
# GENERATORS
# =============================================================================

class CatalogGenerator:
    """Generate a demo catalog of categories and products"""

    def __init__(self, seed: Optional[int] = 42):
        self.fake = Faker()
        self.random = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)

    def generate_categories(self) -> List[Category]:
        """One category per configured department"""
        return [
            Category(
                name=name,
                description=description,
                created_at=self.fake.date_time_between(
                    start_date="-3y", end_date="-1y", tzinfo=timezone.utc
                ),
            )
            for name, description, _, _ in CATEGORIES
        ]

    def _stock_quantity(self) -> int:
        weights = [level[0] for level in STOCK_LEVELS]
        _, low, high = self.random.choices(STOCK_LEVELS, weights=weights)[0]
        return self.random.randint(low, high)

    def generate_products(self, categories: List[Category], n: int = 50) -> List[Product]:
        """
        Generate n products spread over the given (already stored) categories.

        Args:
            categories: Categories with assigned ids
            n: Number of products

        Returns:
            Unsaved Product entities
        """
        by_name = {c.name: c for c in categories}
        configured = [c for c in CATEGORIES if c[0] in by_name]
        if not configured:
            return []

        products = []
        for _ in range(n):
            name, _, kinds, (min_price, max_price) = self.random.choice(configured)
            kind = self.random.choice(kinds)

            products.append(Product(
                name=f"{self.fake.word().title()} {kind}",
                description=self.fake.sentence(nb_words=12),
                sku=f"SKU-{self.fake.unique.random_number(digits=8, fix_len=True)}",
                price=Decimal(str(round(self.random.uniform(min_price, max_price), 2))),
                quantity_in_stock=self._stock_quantity(),
                category_id=by_name[name].id,
                created_at=self.fake.date_time_between(
                    start_date="-2y", end_date="now", tzinfo=timezone.utc
                ),
            ))

        return products
