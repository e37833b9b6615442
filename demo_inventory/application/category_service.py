"""
Category Service
"""

from typing import List, Optional

import structlog

from demo_inventory.application.schemas import CategoryDto, CreateCategoryDto
from demo_inventory.domain.category import Category
from demo_inventory.domain.exceptions import EntityValidationError
from demo_inventory.domain.repositories import CategoryRepository

logger = structlog.get_logger(__name__)


class CategoryService:
    """Category listing and creation"""

    def __init__(self, repository: CategoryRepository):
        if repository is None:
            raise ValueError("repository is required")
        self._repository = repository

    async def get_all_categories(self) -> List[CategoryDto]:
        return [CategoryDto.model_validate(c) for c in await self._repository.get_all()]

    async def get_category_by_id(self, category_id: int) -> Optional[CategoryDto]:
        category = await self._repository.get_by_id(category_id)
        return CategoryDto.model_validate(category) if category else None

    async def create_category(self, dto: CreateCategoryDto) -> CategoryDto:
        """
        Create a category.

        Raises:
            EntityValidationError: If a field is invalid or the name is taken
        """
        category = Category(name=dto.name, description=dto.description)

        if await self._repository.get_by_name(category.name) is not None:
            raise EntityValidationError(f"Category '{category.name}' already exists.", "name")

        created = await self._repository.add(category)
        logger.info("Category created", category_id=created.id, name=created.name)
        return CategoryDto.model_validate(created)
