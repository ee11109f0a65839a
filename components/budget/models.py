"""Budget model for the database."""

from sqlalchemy import Column, Integer, String, DateTime, Numeric

from components.core.database import Base


class Budget(Base):
    """Budget model storing the monthly spending ceiling of a category."""
    __tablename__ = "budgets"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(50), unique=True, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, nullable=False)
