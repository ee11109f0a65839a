"""Transaction model for the database."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric

from components.core.database import Base


class Transaction(Base):
    """Transaction model representing a single income or expense."""
    __tablename__ = "transactions"
    # Never hand out the id of a deleted row again (SQLite reuses ids otherwise)
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String(50), nullable=False, index=True)  # Loose join with budgets.category
    type = Column(String(10), nullable=False)  # 'income' or 'expense'
    date = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)
