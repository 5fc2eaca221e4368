"""
Transaction model for income and expense records.
"""
from datetime import datetime
from sqlalchemy import Column, String, Numeric, Boolean, DateTime, ForeignKey, Integer, Text, Index
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Transaction(BaseModel):
    """A single income or expense owned by one user."""
    __tablename__ = "transactions"
    
    owner_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    amount = Column(Numeric(15, 2, asdecimal=False), nullable=False)  # Sign-agnostic, direction is is_expense
    is_expense = Column(Boolean, default=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(DateTime, default=datetime.now, nullable=False)
    
    # Relationships
    owner = relationship("User", back_populates="transactions")
    tag_entries = relationship(
        "TransactionTag",
        back_populates="transaction",
        order_by="TransactionTag.position",
        cascade="all, delete-orphan",
    )
    
    __table_args__ = (
        Index("ix_transactions_owner_date", "owner_id", "date"),
    )
    
    @property
    def tags(self):
        return [entry.tag for entry in self.tag_entries]
    
    @tags.setter
    def tags(self, values):
        self.tag_entries = [TransactionTag(position=i, tag=tag) for i, tag in enumerate(values)]


class TransactionTag(BaseModel):
    """Ordered tag of a transaction; duplicates are allowed."""
    __tablename__ = "transaction_tags"
    
    transaction_id = Column(String(64), ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    tag = Column(String(100), nullable=False, index=True)
    
    # Relationships
    transaction = relationship("Transaction", back_populates="tag_entries")
