"""
Pydantic schemas for Budget entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.budget import BudgetPeriod


class BudgetCreate(BaseModel):
    """Schema for budget creation."""
    category: str = Field(..., max_length=100)
    amount: float
    period: BudgetPeriod = BudgetPeriod.MONTHLY


class BudgetUpdate(BaseModel):
    """Schema for budget update; only supplied fields change."""
    category: Optional[str] = Field(None, max_length=100)
    amount: Optional[float] = None
    period: Optional[BudgetPeriod] = None
    is_active: Optional[bool] = None


class BudgetResponse(BaseModel):
    """Schema for budget response."""
    id: str
    owner_id: str
    category: str
    amount: float
    period: BudgetPeriod
    start_date: datetime
    is_active: bool
    
    class Config:
        from_attributes = True


class BudgetWithSpending(BudgetResponse):
    """Budget enriched with spending over its current window."""
    spent: float = 0  # Sum of tagged expenses in the window
    remaining: float  # amount - spent, negative when overspent
    percentage: float = 0  # 100 * spent / amount, unbounded above
