"""Pydantic schemas for analytics responses."""

from components.core.schemas import CamelModel


class CategoryTotal(CamelModel):
    """Expense total of a single category."""
    category: str
    total: float
    count: int


class MonthlyTotal(CamelModel):
    """Expense total of one calendar month, labelled like "Jan 2024"."""
    month: str
    total: float


class Summary(CamelModel):
    """Dashboard summary figures."""
    total_income: float
    total_expenses: float
    balance: float
    budget_used: int
    current_month_expenses: float
    total_budget: float


class BudgetProgress(CamelModel):
    """Current month spend of a category against its own budget."""
    category: str
    spent: float
    budget: float
    percentage: float
    is_over_budget: bool
