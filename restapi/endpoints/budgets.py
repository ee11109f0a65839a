"""Budget endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status

from components.budget import schemas
from components.core.init_db import get_storage
from components.core.schemas import ErrorResponse, ValidationErrorResponse
from components.storage.base import Storage

router = APIRouter(
    prefix="/budgets",
    tags=["budgets"],
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Not found"},
    },
)


@router.get("", response_model=List[schemas.Budget])
async def read_budgets(storage: Storage = Depends(get_storage)):
    """Get all budgets."""
    return await storage.get_budgets()


@router.get("/{category}", response_model=schemas.Budget)
async def read_budget(
    category: str,
    storage: Storage = Depends(get_storage)
):
    """Get the budget of a category."""
    budget = await storage.get_budget(category)
    if budget is None:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.post("", response_model=schemas.Budget, status_code=status.HTTP_201_CREATED)
async def create_budget(
    budget: schemas.BudgetCreate,
    storage: Storage = Depends(get_storage)
):
    """
    Create the budget of a category.

    An existing budget for the same category is replaced, not rejected.
    """
    return await storage.create_budget(budget)


@router.put("/{category}", response_model=schemas.Budget)
async def update_budget(
    category: str,
    budget: schemas.BudgetUpdate,
    storage: Storage = Depends(get_storage)
):
    """Update the budget of a category."""
    updated = await storage.update_budget(category, budget)
    if updated is None:
        raise HTTPException(status_code=404, detail="Budget not found")
    return updated


@router.delete("/{category}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    category: str,
    storage: Storage = Depends(get_storage)
):
    """Delete the budget of a category."""
    if not await storage.delete_budget(category):
        raise HTTPException(status_code=404, detail="Budget not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
