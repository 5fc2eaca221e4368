"""
Declarative base and shared model columns.
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_id() -> str:
    """Generate an opaque string identifier."""
    return uuid.uuid4().hex


class BaseModel(Base):
    """Abstract base with id and audit timestamps."""
    __abstract__ = True
    
    id = Column(String(64), primary_key=True, default=generate_id)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
