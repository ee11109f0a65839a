"""Analytics endpoints for the API."""

from datetime import date, datetime, time
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.exceptions import RequestValidationError

from components.analytics import schemas
from components.analytics.aggregator import AnalyticsAggregator
from components.core.config import Settings
from components.core.init_db import get_analytics, get_app_settings
from components.transaction import schemas as transaction_schemas

router = APIRouter(
    prefix="/analytics",
    tags=["analytics"],
)


@router.get("/categories", response_model=List[schemas.CategoryTotal])
async def get_category_totals(analytics: AnalyticsAggregator = Depends(get_analytics)):
    """Get expense totals per category. Categories without expenses are omitted."""
    return await analytics.get_transactions_by_category()


@router.get("/monthly", response_model=List[schemas.MonthlyTotal])
async def get_monthly_expenses(
    months: Optional[int] = Query(
        None,
        description="Number of calendar months ending with the current one (defaults to DEFAULT_MONTHS)",
    ),
    settings: Settings = Depends(get_app_settings),
    analytics: AnalyticsAggregator = Depends(get_analytics)
):
    """
    Get expense totals per calendar month.

    Returns exactly ``months`` entries in ascending order, ending with the
    current month. Months without expenses have a total of 0.
    """
    if months is None:
        months = settings.DEFAULT_MONTHS
    if not 1 <= months <= settings.MAX_MONTHS:
        raise RequestValidationError([{
            "loc": ("query", "months"),
            "msg": f"Input should be between 1 and {settings.MAX_MONTHS}",
            "type": "value_error",
        }])
    return await analytics.get_monthly_expenses(months)


@router.get("/summary", response_model=schemas.Summary)
async def get_summary(analytics: AnalyticsAggregator = Depends(get_analytics)):
    """
    Get dashboard summary figures.

    Returns:
    - Total income and total expenses over all time
    - Balance (income minus expenses)
    - Expenses of the current month
    - Sum of all budgets
    - Percentage of the summed budgets used by this month's expenses
    """
    return await analytics.get_summary()


@router.get("/budgets", response_model=List[schemas.BudgetProgress])
async def get_budget_progress(analytics: AnalyticsAggregator = Depends(get_analytics)):
    """Get this month's spend of every budgeted category against its own budget."""
    return await analytics.get_budget_progress()


@router.get("/range", response_model=List[transaction_schemas.Transaction])
async def get_transactions_in_range(
    start: date = Query(..., description="First day to include"),
    end: Optional[date] = Query(None, description="Last day to include (defaults to start)"),
    analytics: AnalyticsAggregator = Depends(get_analytics)
):
    """Get transactions dated between two days, both days included entirely."""
    end = end or start
    if start > end:
        raise HTTPException(status_code=400, detail="Start date must not be after end date")
    return await analytics.get_transactions_by_date_range(
        datetime.combine(start, time.min),
        datetime.combine(end, time.max),
    )
