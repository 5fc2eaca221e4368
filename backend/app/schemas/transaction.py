"""
Pydantic schemas for Transaction entity.
"""
from pydantic import BaseModel, Field, constr, field_validator
from typing import Dict, List, Optional
from datetime import datetime
from app.core.utils import to_local_naive


class TransactionCreate(BaseModel):
    """Schema for transaction creation; a client-supplied id makes creation idempotent."""
    id: Optional[str] = Field(None, max_length=64)
    title: str = Field(..., max_length=200)
    amount: float
    is_expense: bool
    tags: List[constr(max_length=100)] = []
    description: str = ""
    date: Optional[datetime] = None
    
    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        if not v.strip():
            raise ValueError("title must not be empty")
        return v.strip()
    
    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v):
        return [tag.strip() for tag in v]
    
    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_local_naive(v)


class TransactionUpdate(BaseModel):
    """Schema for transaction update."""
    title: Optional[str] = Field(None, max_length=200)
    amount: Optional[float] = None
    is_expense: Optional[bool] = None
    tags: Optional[List[constr(max_length=100)]] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    
    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("title must not be empty")
        return v.strip() if v is not None else v
    
    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_local_naive(v)


class TransactionResponse(BaseModel):
    """Schema for transaction response."""
    id: str
    title: str
    amount: float
    is_expense: bool
    tags: List[str] = []
    description: str
    date: datetime
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class BalanceResponse(BaseModel):
    """Income and expense totals over all of a user's transactions."""
    balance: float
    total_income: float
    total_expense: float


class AnalyticsResponse(BaseModel):
    """Expense share per tag as whole percentages of total expense."""
    tag_percentages: Dict[str, int]
    total_expense: float
