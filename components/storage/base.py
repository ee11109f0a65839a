"""Storage interface shared by every backend."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from components.budget import schemas as budget_schemas
from components.transaction import schemas as transaction_schemas


def patch_fields(patch: BaseModel) -> Dict[str, Any]:
    """Fields explicitly supplied in a patch; absent and null values never overwrite."""
    return patch.model_dump(exclude_unset=True, exclude_none=True)


class Storage(ABC):
    """
    Repository for transactions and budgets.

    Missing records are reported as ``None`` (lookups and updates) or
    ``False`` (deletes), never as exceptions. Returned records are copies;
    mutating them does not change stored state.
    """

    async def startup(self) -> None:
        """Prepare the backend before serving requests."""

    async def shutdown(self) -> None:
        """Release backend resources."""

    # Transaction operations
    @abstractmethod
    async def get_transactions(self) -> List[transaction_schemas.Transaction]:
        """All transactions, newest ``date`` first, ties by ascending id."""

    @abstractmethod
    async def get_transaction(self, transaction_id: int) -> Optional[transaction_schemas.Transaction]:
        ...

    @abstractmethod
    async def create_transaction(
        self, transaction: transaction_schemas.TransactionCreate
    ) -> transaction_schemas.Transaction:
        ...

    @abstractmethod
    async def update_transaction(
        self, transaction_id: int, transaction: transaction_schemas.TransactionUpdate
    ) -> Optional[transaction_schemas.Transaction]:
        ...

    @abstractmethod
    async def delete_transaction(self, transaction_id: int) -> bool:
        ...

    @abstractmethod
    async def get_transactions_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[transaction_schemas.Transaction]:
        """Transactions with ``start <= date <= end``."""

    # Budget operations
    @abstractmethod
    async def get_budgets(self) -> List[budget_schemas.Budget]:
        ...

    @abstractmethod
    async def get_budget(self, category: str) -> Optional[budget_schemas.Budget]:
        ...

    @abstractmethod
    async def create_budget(self, budget: budget_schemas.BudgetCreate) -> budget_schemas.Budget:
        """Create the budget for a category, replacing any existing one."""

    @abstractmethod
    async def update_budget(
        self, category: str, budget: budget_schemas.BudgetUpdate
    ) -> Optional[budget_schemas.Budget]:
        ...

    @abstractmethod
    async def delete_budget(self, category: str) -> bool:
        ...
