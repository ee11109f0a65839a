"""In-memory storage backend."""

import threading
from datetime import datetime
from typing import Dict, List, Optional

from components.budget import schemas as budget_schemas
from components.core.logging_setup import get_logger
from components.core.utils import to_amount, to_timestamp, utc_now
from components.storage.base import Storage, patch_fields
from components.transaction import schemas as transaction_schemas

logger = get_logger("finance_tracker.storage.memory")


class MemStorage(Storage):
    """
    Process-local storage keeping transactions by id and budgets by category.

    A single lock guards both maps and both id counters, so every operation
    is applied as a whole before another one can observe the store.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._transactions: Dict[int, transaction_schemas.Transaction] = {}
        self._budgets: Dict[str, budget_schemas.Budget] = {}
        self._next_transaction_id = 1
        self._next_budget_id = 1

    # Transaction operations
    async def get_transactions(self) -> List[transaction_schemas.Transaction]:
        with self._lock:
            records = [t.model_copy() for t in self._transactions.values()]
        records.sort(key=lambda t: t.id)
        records.sort(key=lambda t: t.date, reverse=True)
        return records

    async def get_transaction(self, transaction_id: int) -> Optional[transaction_schemas.Transaction]:
        with self._lock:
            record = self._transactions.get(transaction_id)
            return record.model_copy() if record else None

    async def create_transaction(
        self, transaction: transaction_schemas.TransactionCreate
    ) -> transaction_schemas.Transaction:
        data = transaction.model_dump()
        data["amount"] = to_amount(data["amount"])
        data["date"] = to_timestamp(data["date"])
        with self._lock:
            record = transaction_schemas.Transaction(
                id=self._next_transaction_id,
                created_at=utc_now(),
                **data,
            )
            self._next_transaction_id += 1
            self._transactions[record.id] = record
        logger.debug("Created transaction %s", record.id)
        return record.model_copy()

    async def update_transaction(
        self, transaction_id: int, transaction: transaction_schemas.TransactionUpdate
    ) -> Optional[transaction_schemas.Transaction]:
        changes = patch_fields(transaction)
        if "amount" in changes:
            changes["amount"] = to_amount(changes["amount"])
        if "date" in changes:
            changes["date"] = to_timestamp(changes["date"])
        with self._lock:
            existing = self._transactions.get(transaction_id)
            if existing is None:
                return None
            updated = existing.model_copy(update=changes)
            self._transactions[transaction_id] = updated
        logger.debug("Updated transaction %s fields %s", transaction_id, sorted(changes))
        return updated.model_copy()

    async def delete_transaction(self, transaction_id: int) -> bool:
        with self._lock:
            deleted = self._transactions.pop(transaction_id, None) is not None
        if deleted:
            logger.debug("Deleted transaction %s", transaction_id)
        return deleted

    async def get_transactions_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[transaction_schemas.Transaction]:
        with self._lock:
            return [
                t.model_copy()
                for t in self._transactions.values()
                if start <= t.date <= end
            ]

    # Budget operations
    async def get_budgets(self) -> List[budget_schemas.Budget]:
        with self._lock:
            return [b.model_copy() for b in self._budgets.values()]

    async def get_budget(self, category: str) -> Optional[budget_schemas.Budget]:
        with self._lock:
            record = self._budgets.get(category)
            return record.model_copy() if record else None

    async def create_budget(self, budget: budget_schemas.BudgetCreate) -> budget_schemas.Budget:
        with self._lock:
            record = budget_schemas.Budget(
                id=self._next_budget_id,
                category=budget.category,
                amount=to_amount(budget.amount),
                created_at=utc_now(),
            )
            self._next_budget_id += 1
            replaced = self._budgets.pop(budget.category, None)
            self._budgets[budget.category] = record
        if replaced is not None:
            logger.debug("Replaced budget %s for %r", replaced.id, budget.category)
        return record.model_copy()

    async def update_budget(
        self, category: str, budget: budget_schemas.BudgetUpdate
    ) -> Optional[budget_schemas.Budget]:
        changes = patch_fields(budget)
        if "amount" in changes:
            changes["amount"] = to_amount(changes["amount"])
        with self._lock:
            existing = self._budgets.get(category)
            if existing is None:
                return None
            updated = existing.model_copy(update=changes)
            if updated.category != category:
                # Renaming takes over the target slot, one budget per category
                del self._budgets[category]
                self._budgets.pop(updated.category, None)
            self._budgets[updated.category] = updated
        return updated.model_copy()

    async def delete_budget(self, category: str) -> bool:
        with self._lock:
            return self._budgets.pop(category, None) is not None
