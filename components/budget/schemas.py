"""Pydantic schemas for budget data validation."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from components.core.schemas import CamelModel
from components.core.utils import to_amount


class BudgetBase(CamelModel):
    """Base budget schema."""
    category: str = Field(..., min_length=1, max_length=50)
    amount: Decimal

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return to_amount(value)


class BudgetCreate(BudgetBase):
    """Schema for budget creation (replaces an existing budget for the category)."""
    pass


class BudgetUpdate(CamelModel):
    """Schema for partial budget update."""
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    amount: Optional[Decimal] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return None if value is None else to_amount(value)


class Budget(BudgetBase):
    """Schema for budget response."""
    id: int
    created_at: datetime
