"""
Budget model for per-category spending limits.
"""
import enum
from datetime import datetime
from sqlalchemy import Column, String, Numeric, Boolean, DateTime, ForeignKey, Enum as SQLEnum, Index
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class BudgetPeriod(str, enum.Enum):
    """Rolling window a budget accumulates spending over."""
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    YEARLY = "yearly"


class Budget(BaseModel):
    """Spending limit for one tag category."""
    __tablename__ = "budgets"
    
    owner_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String(100), nullable=False)  # Matched against transaction tags
    amount = Column(Numeric(15, 2, asdecimal=False), nullable=False)
    period = Column(
        SQLEnum(BudgetPeriod, values_callable=lambda e: [m.value for m in e]),
        default=BudgetPeriod.MONTHLY,
        nullable=False,
    )
    start_date = Column(DateTime, default=datetime.now, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    
    # Relationships
    owner = relationship("User", back_populates="budgets")
    
    # At most one active budget per (owner, category) is enforced in the service layer
    __table_args__ = (
        Index("ix_budgets_owner_category", "owner_id", "category"),
    )
