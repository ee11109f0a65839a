"""Pydantic schemas for transaction data validation."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from components.core.schemas import CamelModel
from components.core.utils import to_amount, to_timestamp

# Advisory labels for the UI; storage accepts any non-empty category.
CATEGORIES = (
    "Food & Dining",
    "Transportation",
    "Entertainment",
    "Utilities",
    "Shopping",
    "Healthcare",
    "Income",
    "Other",
)


class TransactionType(str, Enum):
    """Kind of money movement."""
    INCOME = "income"
    EXPENSE = "expense"


class TransactionBase(CamelModel):
    """Base transaction schema."""
    description: str = Field(..., min_length=1)
    amount: Decimal
    category: str = Field(..., min_length=1, max_length=50)
    type: TransactionType
    date: datetime

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return to_amount(value)

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        return to_timestamp(value)


class TransactionCreate(TransactionBase):
    """Schema for transaction creation. Client supplied id/createdAt are ignored."""
    pass


class TransactionUpdate(CamelModel):
    """Schema for partial transaction update; omitted fields stay untouched."""
    description: Optional[str] = Field(None, min_length=1)
    amount: Optional[Decimal] = None
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    type: Optional[TransactionType] = None
    date: Optional[datetime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return None if value is None else to_amount(value)

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        return None if value is None else to_timestamp(value)


class Transaction(TransactionBase):
    """Schema for transaction response."""
    id: int
    created_at: datetime
