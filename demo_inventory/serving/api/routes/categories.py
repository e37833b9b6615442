"""
Categories API Endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from demo_inventory.application import CategoryService
from demo_inventory.application.schemas import CategoryDto, CreateCategoryDto
from demo_inventory.domain.exceptions import CategoryNotFoundError
from demo_inventory.serving.api.dependencies import get_category_service
from demo_inventory.serving.api.security import require_api_key

router = APIRouter()


@router.get("", response_model=List[CategoryDto])
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> List[CategoryDto]:
    return await service.get_all_categories()


@router.get("/{category_id}", response_model=CategoryDto)
async def get_category(
    category_id: int = Path(..., ge=1),
    service: CategoryService = Depends(get_category_service),
) -> CategoryDto:
    category = await service.get_category_by_id(category_id)
    if category is None:
        raise CategoryNotFoundError(category_id)
    return category


@router.post(
    "",
    response_model=CategoryDto,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
async def create_category(
    payload: CreateCategoryDto,
    service: CategoryService = Depends(get_category_service),
) -> CategoryDto:
    return await service.create_category(payload)
