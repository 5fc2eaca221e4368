"""
Budget management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.budget import BudgetCreate, BudgetUpdate, BudgetResponse, BudgetWithSpending
from app.api.dependencies import get_current_user, ensure_self
from app.services import budget_service

router = APIRouter(tags=["budgets"])


@router.get("/users/{user_id}/budgets", response_model=List[BudgetWithSpending])
async def get_budgets(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get all budgets with spending over their current period."""
    ensure_self(user_id, current_user)
    return budget_service.list_with_spending(db, user_id)


@router.post("/users/{user_id}/budgets", response_model=BudgetWithSpending, status_code=status.HTTP_201_CREATED)
async def create_budget(
    user_id: str,
    budget_data: BudgetCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a budget for a category."""
    ensure_self(user_id, current_user)
    budget = budget_service.create_budget(
        db,
        user_id,
        category=budget_data.category,
        amount=budget_data.amount,
        period=budget_data.period
    )
    return budget_service.with_spending(budget, spent=0)


@router.put("/budgets/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    budget_id: str,
    budget_data: BudgetUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an own budget."""
    return budget_service.update_budget(db, current_user.id, budget_id, budget_data)


@router.delete("/budgets/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an own budget."""
    budget_service.delete_budget(db, current_user.id, budget_id)
    return None
