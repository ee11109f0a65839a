from datetime import datetime

import pytest

from components.analytics import aggregator
from components.analytics.aggregator import AnalyticsAggregator
from components.budget.schemas import Budget, BudgetCreate
from components.core.utils import utc_now
from components.storage.memory import MemStorage
from components.transaction.schemas import Transaction, TransactionCreate

NOW = datetime(2024, 3, 15, 12, 0)

# ---- Helpers -----------------------------------------------------------------

_next_id = iter(range(1, 10_000))


def _tx(amount, category="Shopping", kind="expense", date="2024-03-10") -> Transaction:
    return Transaction.model_validate({
        "id": next(_next_id),
        "description": f"{kind} {category}",
        "amount": amount,
        "category": category,
        "type": kind,
        "date": date,
        "createdAt": NOW,
    })


def _budget(category, amount) -> Budget:
    return Budget.model_validate({"id": next(_next_id), "category": category, "amount": amount, "createdAt": NOW})


# ---- Pure functions ------------------------------------------------------------


def test_category_totals_skip_income_and_empty_categories():
    result = aggregator.category_totals([_tx(50, "Shopping"), _tx(1000, "Income", kind="income")])
    assert [r.model_dump() for r in result] == [{"category": "Shopping", "total": 50.0, "count": 1}]


def test_category_totals_sum_and_count_per_category():
    result = aggregator.category_totals([
        _tx("10.10", "Food & Dining"),
        _tx("20.20", "Food & Dining"),
        _tx(5, "Transportation"),
    ])
    by_category = {r.category: (r.total, r.count) for r in result}
    assert by_category == {"Food & Dining": (30.3, 2), "Transportation": (5.0, 1)}


def test_monthly_expenses_returns_every_month_ascending_with_zero_totals():
    result = aggregator.monthly_expenses(
        [
            _tx(20, date="2024-01-05"),
            _tx(30, date="2024-03-01"),
            _tx(999, kind="income", date="2024-03-02"),
        ],
        3,
        NOW,
    )
    assert [(m.month, m.total) for m in result] == [
        ("Jan 2024", 20.0),
        ("Feb 2024", 0.0),
        ("Mar 2024", 30.0),
    ]


def test_monthly_expenses_cross_year_and_include_whole_last_day():
    result = aggregator.monthly_expenses(
        [_tx(15, date="2023-12-31T23:30:00"), _tx(7, date="2023-11-30")],
        2,
        datetime(2024, 1, 2),
    )
    assert [(m.month, m.total) for m in result] == [("Dec 2023", 15.0), ("Jan 2024", 0.0)]


def test_summary_totals_and_balance():
    summary = aggregator.summarize(
        [
            _tx(1000, "Income", kind="income", date="2023-06-01"),
            _tx(200, date="2023-06-02"),
            _tx(50, date="2024-03-01"),
        ],
        [_budget("Shopping", 200), _budget("Food & Dining", 100)],
        NOW,
    )
    assert summary.total_income == 1000.0
    assert summary.total_expenses == 250.0
    assert summary.balance == 750.0
    assert summary.current_month_expenses == 50.0
    assert summary.total_budget == 300.0
    # 50 / 300 = 16.67%
    assert summary.budget_used == 17


def test_summary_budget_used_rounds_half_up():
    summary = aggregator.summarize([_tx(1)], [_budget("Shopping", 8)], NOW)
    assert summary.budget_used == 13


def test_summary_budget_used_is_zero_without_budgets():
    summary = aggregator.summarize([_tx(5000)], [], NOW)
    assert summary.budget_used == 0
    assert summary.total_budget == 0.0


def test_summary_budget_used_ignores_category_matching():
    # Spend lands in a category without its own budget, yet still counts
    summary = aggregator.summarize([_tx(100, "Healthcare")], [_budget("Shopping", 400)], NOW)
    assert summary.budget_used == 25


def test_budget_progress_caps_percentage_and_flags_overspend():
    progress = aggregator.budget_progress(
        [
            _tx(150, "Shopping"),
            _tx(25, "Food & Dining"),
            _tx(500, "Food & Dining", date="2024-02-01"),
        ],
        [_budget("Shopping", 100), _budget("Food & Dining", 100), _budget("Utilities", 60)],
        NOW,
    )
    assert [(p.category, p.spent, p.percentage, p.is_over_budget) for p in progress] == [
        ("Shopping", 150.0, 100.0, True),
        ("Food & Dining", 25.0, 25.0, False),
        ("Utilities", 0.0, 0.0, False),
    ]


# ---- Aggregator over storage ----------------------------------------------------


@pytest.mark.anyio
async def test_aggregator_reads_latest_storage_state():
    storage = MemStorage()
    analytics = AnalyticsAggregator(storage, clock=lambda: NOW)

    assert await analytics.get_transactions_by_category() == []
    assert [m.total for m in await analytics.get_monthly_expenses(3)] == [0.0, 0.0, 0.0]

    await storage.create_transaction(TransactionCreate.model_validate({
        "description": "Shoes", "amount": "80", "category": "Shopping", "type": "expense", "date": "2024-03-03",
    }))
    await storage.create_budget(BudgetCreate(category="Shopping", amount=160))

    categories = await analytics.get_transactions_by_category()
    assert [(c.category, c.total, c.count) for c in categories] == [("Shopping", 80.0, 1)]

    monthly = await analytics.get_monthly_expenses(3)
    assert [(m.month, m.total) for m in monthly] == [("Jan 2024", 0.0), ("Feb 2024", 0.0), ("Mar 2024", 80.0)]

    summary = await analytics.get_summary()
    assert summary.budget_used == 50

    progress = await analytics.get_budget_progress()
    assert progress[0].percentage == 50.0

    in_range = await analytics.get_transactions_by_date_range(datetime(2024, 3, 3), datetime(2024, 3, 3))
    assert [t.description for t in in_range] == ["Shoes"]


@pytest.mark.anyio
async def test_aggregator_monthly_window_excludes_next_month():
    storage = MemStorage()
    await storage.create_transaction(TransactionCreate.model_validate({
        "description": "Future", "amount": 9, "category": "Other", "type": "expense", "date": "2024-04-01",
    }))
    analytics = AnalyticsAggregator(storage, clock=lambda: NOW)

    monthly = await analytics.get_monthly_expenses(1)
    assert [(m.month, m.total) for m in monthly] == [("Mar 2024", 0.0)]


def test_default_clock_is_utc():
    assert AnalyticsAggregator(MemStorage()).clock is utc_now


def test_offset_timestamps_count_in_their_utc_month():
    # 22:00 at UTC-5 on the last day of February is already March in UTC
    result = aggregator.monthly_expenses([_tx(40, date="2024-02-29T22:00:00-05:00")], 2, NOW)
    assert [(m.month, m.total) for m in result] == [("Feb 2024", 0.0), ("Mar 2024", 40.0)]
