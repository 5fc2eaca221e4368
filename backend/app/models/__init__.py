"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.transaction import Transaction, TransactionTag
from app.models.budget import Budget, BudgetPeriod

__all__ = [
    "User",
    "Transaction",
    "TransactionTag",
    "Budget",
    "BudgetPeriod",
]
