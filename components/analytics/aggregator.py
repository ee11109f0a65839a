"""Analytics derived from the current transactions and budgets.

The module-level functions are pure and work on plain record lists.
``AnalyticsAggregator`` reads a fresh snapshot from storage on every call,
nothing is cached.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Iterable, List, Sequence

from components.analytics import schemas
from components.budget.schemas import Budget
from components.core.utils import month_label, month_start, shift_month, utc_now
from components.storage.base import Storage
from components.transaction.schemas import Transaction, TransactionType

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _sum_amounts(transactions: Iterable[Transaction], kind: TransactionType) -> Decimal:
    return sum((t.amount for t in transactions if t.type == kind), ZERO)


def _in_month(transactions: Iterable[Transaction], start: datetime) -> List[Transaction]:
    end = shift_month(start, 1)
    return [t for t in transactions if start <= t.date < end]


def category_totals(transactions: Iterable[Transaction]) -> List[schemas.CategoryTotal]:
    """Expense totals per category, in order of first appearance. Income is ignored."""
    groups: Dict[str, List[Decimal]] = {}
    for transaction in transactions:
        if transaction.type != TransactionType.EXPENSE:
            continue
        groups.setdefault(transaction.category, []).append(transaction.amount)

    return [
        schemas.CategoryTotal(category=category, total=float(sum(amounts, ZERO)), count=len(amounts))
        for category, amounts in groups.items()
    ]


def monthly_expenses(
    transactions: Sequence[Transaction], months: int, now: datetime
) -> List[schemas.MonthlyTotal]:
    """
    Expense totals for ``months`` calendar months ending with the month of ``now``.

    Months are ascending and months without expenses report a zero total.
    """
    current = month_start(now)
    result = []
    for offset in range(months - 1, -1, -1):
        start = shift_month(current, -offset)
        total = _sum_amounts(_in_month(transactions, start), TransactionType.EXPENSE)
        result.append(schemas.MonthlyTotal(month=month_label(start), total=float(total)))
    return result


def summarize(
    transactions: Sequence[Transaction], budgets: Sequence[Budget], now: datetime
) -> schemas.Summary:
    """
    Portfolio level figures.

    ``budget_used`` compares this month's expenses of every category against
    the sum of all budgets, rounded half up, and is 0 without budgets.
    """
    total_income = _sum_amounts(transactions, TransactionType.INCOME)
    total_expenses = _sum_amounts(transactions, TransactionType.EXPENSE)
    current_month_expenses = _sum_amounts(
        _in_month(transactions, month_start(now)), TransactionType.EXPENSE
    )
    total_budget = sum((b.amount for b in budgets), ZERO)

    budget_used = 0
    if total_budget > 0:
        ratio = current_month_expenses / total_budget * HUNDRED
        budget_used = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return schemas.Summary(
        total_income=float(total_income),
        total_expenses=float(total_expenses),
        balance=float(total_income - total_expenses),
        budget_used=budget_used,
        current_month_expenses=float(current_month_expenses),
        total_budget=float(total_budget),
    )


def budget_progress(
    transactions: Sequence[Transaction], budgets: Sequence[Budget], now: datetime
) -> List[schemas.BudgetProgress]:
    """Each budget against this month's expenses of the same category name."""
    spent: Dict[str, Decimal] = {}
    for transaction in _in_month(transactions, month_start(now)):
        if transaction.type == TransactionType.EXPENSE:
            spent[transaction.category] = spent.get(transaction.category, ZERO) + transaction.amount

    progress = []
    for budget in budgets:
        category_spent = spent.get(budget.category, ZERO)
        ratio = category_spent / budget.amount * HUNDRED
        progress.append(schemas.BudgetProgress(
            category=budget.category,
            spent=float(category_spent),
            budget=float(budget.amount),
            percentage=float(min(ratio, HUNDRED).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
            is_over_budget=ratio > HUNDRED,
        ))
    return progress


class AnalyticsAggregator:
    """Read-only analytics over a storage backend."""

    def __init__(self, storage: Storage, clock: Callable[[], datetime] = utc_now):
        """Initialize aggregator with storage and a clock deciding the current month."""
        self.storage = storage
        self.clock = clock

    async def get_transactions_by_date_range(self, start: datetime, end: datetime) -> List[Transaction]:
        """Transactions dated within ``[start, end]``, both ends inclusive."""
        return await self.storage.get_transactions_by_date_range(start, end)

    async def get_transactions_by_category(self) -> List[schemas.CategoryTotal]:
        return category_totals(await self.storage.get_transactions())

    async def get_monthly_expenses(self, months: int) -> List[schemas.MonthlyTotal]:
        now = self.clock()
        first = shift_month(month_start(now), -(months - 1))
        # Only the requested window is read
        window = await self.storage.get_transactions_by_date_range(
            first, shift_month(month_start(now), 1)
        )
        return monthly_expenses(window, months, now)

    async def get_summary(self) -> schemas.Summary:
        transactions = await self.storage.get_transactions()
        budgets = await self.storage.get_budgets()
        return summarize(transactions, budgets, self.clock())

    async def get_budget_progress(self) -> List[schemas.BudgetProgress]:
        now = self.clock()
        start = month_start(now)
        transactions = await self.storage.get_transactions_by_date_range(start, shift_month(start, 1))
        budgets = await self.storage.get_budgets()
        return budget_progress(transactions, budgets, now)
