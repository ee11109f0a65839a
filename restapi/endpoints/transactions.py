"""Transaction endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status

from components.core.init_db import get_storage
from components.core.schemas import ErrorResponse, ValidationErrorResponse
from components.storage.base import Storage
from components.transaction import schemas

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Not found"},
    },
)


@router.get("", response_model=List[schemas.Transaction])
async def read_transactions(storage: Storage = Depends(get_storage)):
    """Get all transactions, newest first."""
    return await storage.get_transactions()


@router.get("/{transaction_id}", response_model=schemas.Transaction)
async def read_transaction(
    transaction_id: int,
    storage: Storage = Depends(get_storage)
):
    """Get a specific transaction by ID."""
    transaction = await storage.get_transaction(transaction_id)
    if transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.post("", response_model=schemas.Transaction, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction: schemas.TransactionCreate,
    storage: Storage = Depends(get_storage)
):
    """Create a new transaction."""
    return await storage.create_transaction(transaction)


@router.put("/{transaction_id}", response_model=schemas.Transaction)
async def update_transaction(
    transaction_id: int,
    transaction: schemas.TransactionUpdate,
    storage: Storage = Depends(get_storage)
):
    """Update only the supplied fields of a transaction."""
    updated = await storage.update_transaction(transaction_id, transaction)
    if updated is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return updated


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: int,
    storage: Storage = Depends(get_storage)
):
    """Delete a transaction."""
    if not await storage.delete_transaction(transaction_id):
        raise HTTPException(status_code=404, detail="Transaction not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
