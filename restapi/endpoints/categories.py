"""Category endpoints for the API."""

from typing import List
from fastapi import APIRouter

from components.transaction.schemas import CATEGORIES

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
)


@router.get("", response_model=List[str])
async def read_categories() -> List[str]:
    """Get the suggested categories. Any other non-empty category is accepted too."""
    return list(CATEGORIES)
