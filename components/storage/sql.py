"""Repository backed by a SQLAlchemy async database."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select

from components.budget import models as budget_models
from components.budget import schemas as budget_schemas
from components.core.database import DatabaseManager
from components.core.logging_setup import get_logger
from components.core.utils import to_amount, to_timestamp, utc_now
from components.storage.base import Storage, patch_fields
from components.transaction import models as transaction_models
from components.transaction import schemas as transaction_schemas

logger = get_logger("finance_tracker.storage.sql")

Transaction = transaction_models.Transaction
Budget = budget_models.Budget


class SqlStorage(Storage):
    """Repository for transactions and budgets stored in a relational database."""

    def __init__(self, db_manager: DatabaseManager):
        """Initialize repository with a database manager."""
        self.db_manager = db_manager

    async def startup(self) -> None:
        await self.db_manager.create_tables()

    async def shutdown(self) -> None:
        await self.db_manager.dispose()

    # Transaction operations
    async def get_transactions(self) -> List[transaction_schemas.Transaction]:
        async with self.db_manager.get_db() as session:
            result = await session.execute(
                select(Transaction).order_by(Transaction.date.desc(), Transaction.id)
            )
            return [transaction_schemas.Transaction.model_validate(t) for t in result.scalars().all()]

    async def get_transaction(self, transaction_id: int) -> Optional[transaction_schemas.Transaction]:
        async with self.db_manager.get_db() as session:
            db_transaction = await session.get(Transaction, transaction_id)
            if db_transaction is None:
                return None
            return transaction_schemas.Transaction.model_validate(db_transaction)

    async def create_transaction(
        self, transaction: transaction_schemas.TransactionCreate
    ) -> transaction_schemas.Transaction:
        async with self.db_manager.get_db() as session:
            db_transaction = Transaction(
                description=transaction.description,
                amount=to_amount(transaction.amount),
                category=transaction.category,
                type=transaction.type.value,
                date=to_timestamp(transaction.date),
                created_at=utc_now(),
            )
            session.add(db_transaction)
            await session.commit()
            await session.refresh(db_transaction)
            logger.debug("Created transaction %s", db_transaction.id)
            return transaction_schemas.Transaction.model_validate(db_transaction)

    async def update_transaction(
        self, transaction_id: int, transaction: transaction_schemas.TransactionUpdate
    ) -> Optional[transaction_schemas.Transaction]:
        changes = patch_fields(transaction)
        async with self.db_manager.get_db() as session:
            db_transaction = await session.get(Transaction, transaction_id)
            if db_transaction is None:
                return None

            if "amount" in changes:
                changes["amount"] = to_amount(changes["amount"])
            if "date" in changes:
                changes["date"] = to_timestamp(changes["date"])
            if "type" in changes:
                changes["type"] = transaction_schemas.TransactionType(changes["type"]).value
            for field, value in changes.items():
                setattr(db_transaction, field, value)

            await session.commit()
            await session.refresh(db_transaction)
            return transaction_schemas.Transaction.model_validate(db_transaction)

    async def delete_transaction(self, transaction_id: int) -> bool:
        async with self.db_manager.get_db() as session:
            db_transaction = await session.get(Transaction, transaction_id)
            if db_transaction is None:
                return False

            await session.delete(db_transaction)
            await session.commit()
            return True

    async def get_transactions_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[transaction_schemas.Transaction]:
        async with self.db_manager.get_db() as session:
            result = await session.execute(
                select(Transaction)
                .where(Transaction.date >= start, Transaction.date <= end)
                .order_by(Transaction.id)
            )
            return [transaction_schemas.Transaction.model_validate(t) for t in result.scalars().all()]

    # Budget operations
    async def get_budgets(self) -> List[budget_schemas.Budget]:
        async with self.db_manager.get_db() as session:
            result = await session.execute(select(Budget).order_by(Budget.id))
            return [budget_schemas.Budget.model_validate(b) for b in result.scalars().all()]

    async def get_budget(self, category: str) -> Optional[budget_schemas.Budget]:
        async with self.db_manager.get_db() as session:
            result = await session.execute(select(Budget).where(Budget.category == category))
            db_budget = result.scalar_one_or_none()
            return budget_schemas.Budget.model_validate(db_budget) if db_budget else None

    async def create_budget(self, budget: budget_schemas.BudgetCreate) -> budget_schemas.Budget:
        async with self.db_manager.get_db() as session:
            # Replace in one transaction so the category is never held twice
            await session.execute(delete(Budget).where(Budget.category == budget.category))
            db_budget = Budget(
                category=budget.category,
                amount=to_amount(budget.amount),
                created_at=utc_now(),
            )
            session.add(db_budget)
            await session.commit()
            await session.refresh(db_budget)
            return budget_schemas.Budget.model_validate(db_budget)

    async def update_budget(
        self, category: str, budget: budget_schemas.BudgetUpdate
    ) -> Optional[budget_schemas.Budget]:
        changes = patch_fields(budget)
        async with self.db_manager.get_db() as session:
            result = await session.execute(select(Budget).where(Budget.category == category))
            db_budget = result.scalar_one_or_none()
            if db_budget is None:
                return None

            new_category = changes.get("category", category)
            if new_category != category:
                await session.execute(delete(Budget).where(Budget.category == new_category))
                db_budget.category = new_category
            if "amount" in changes:
                db_budget.amount = to_amount(changes["amount"])

            await session.commit()
            await session.refresh(db_budget)
            return budget_schemas.Budget.model_validate(db_budget)

    async def delete_budget(self, category: str) -> bool:
        async with self.db_manager.get_db() as session:
            result = await session.execute(delete(Budget).where(Budget.category == category))
            await session.commit()
            return result.rowcount > 0
