"""
Budget engine: period windows and spending per budget category.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from app.core.exceptions import DuplicateActiveBudgetError, InvalidInputError, NotFoundError
from app.db.session import commit_changes
from app.models.budget import Budget, BudgetPeriod
from app.schemas.budget import BudgetUpdate, BudgetWithSpending
from app.services.ledger_service import list_by_owner_with_tag

logger = logging.getLogger(__name__)


def window_for(period: BudgetPeriod, now: datetime) -> Tuple[datetime, datetime]:
    """
    Return the [start, now] range a budget of ``period`` accumulates over.
    Weeks start on Sunday.
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    period = BudgetPeriod(period)
    
    if period == BudgetPeriod.MONTHLY:
        start = midnight.replace(day=1)
    elif period == BudgetPeriod.WEEKLY:
        # weekday(): Monday=0 ... Sunday=6
        start = midnight - timedelta(days=(now.weekday() + 1) % 7)
    else:
        start = midnight.replace(month=1, day=1)
    
    return start, now


def calculate_spent(db: Session, budget: Budget, now: datetime) -> float:
    """Sum expenses tagged with the budget category inside its current window."""
    start, end = window_for(budget.period, now)
    transactions = list_by_owner_with_tag(
        db, budget.owner_id, budget.category, expense_only=True, start=start, end=end
    )
    return sum(t.amount for t in transactions)


def with_spending(budget: Budget, spent: float) -> BudgetWithSpending:
    """Derive remaining and percentage for a budget."""
    amount = budget.amount
    percentage = (spent / amount) * 100 if amount > 0 else 0
    return BudgetWithSpending(
        id=budget.id,
        owner_id=budget.owner_id,
        category=budget.category,
        amount=amount,
        period=budget.period,
        start_date=budget.start_date,
        is_active=budget.is_active,
        spent=spent,
        remaining=amount - spent,
        percentage=percentage
    )


def list_with_spending(db: Session, owner_id: str, now: Optional[datetime] = None) -> List[BudgetWithSpending]:
    """List every budget of ``owner_id`` with its current spending."""
    now = now or datetime.now()
    budgets = db.query(Budget).filter(Budget.owner_id == owner_id).order_by(Budget.created_at).all()
    return [with_spending(budget, calculate_spent(db, budget, now)) for budget in budgets]


def _find_active(db: Session, owner_id: str, category: str, exclude_id: Optional[str] = None) -> Optional[Budget]:
    query = db.query(Budget).filter(
        Budget.owner_id == owner_id,
        Budget.category == category,
        Budget.is_active.is_(True)
    )
    if exclude_id is not None:
        query = query.filter(Budget.id != exclude_id)
    return query.first()


def _validate(category: Optional[str], amount: Optional[float]) -> None:
    if category is not None and not category.strip():
        raise InvalidInputError("Budget category must not be empty")
    if amount is not None and amount <= 0:
        raise InvalidInputError("Budget amount must be positive")


def create_budget(
    db: Session,
    owner_id: str,
    category: str,
    amount: float,
    period: BudgetPeriod = BudgetPeriod.MONTHLY
) -> Budget:
    """Create an active budget; one active budget per category is allowed."""
    if category is None or amount is None:
        raise InvalidInputError("Invalid budget data")
    _validate(category, amount)
    category = category.strip()
    
    if _find_active(db, owner_id, category):
        raise DuplicateActiveBudgetError()
    
    budget = Budget(
        owner_id=owner_id,
        category=category,
        amount=amount,
        period=period or BudgetPeriod.MONTHLY,
        start_date=datetime.now(),
        is_active=True
    )
    db.add(budget)
    commit_changes(db, "create budget")
    db.refresh(budget)
    logger.info(f"Created {budget.period.value} budget '{category}' for {owner_id}")
    return budget


def get_owned(db: Session, owner_id: str, budget_id: str) -> Budget:
    budget = db.query(Budget).filter(Budget.id == budget_id, Budget.owner_id == owner_id).first()
    if not budget:
        raise NotFoundError("Budget not found")
    return budget


def update_budget(db: Session, owner_id: str, budget_id: str, data: BudgetUpdate) -> Budget:
    """Apply the supplied fields, keeping one active budget per category."""
    budget = get_owned(db, owner_id, budget_id)
    changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
    _validate(changes.get("category"), changes.get("amount"))
    if "category" in changes:
        changes["category"] = changes["category"].strip()
    
    category = changes.get("category", budget.category)
    is_active = changes.get("is_active", budget.is_active)
    if is_active and _find_active(db, owner_id, category, exclude_id=budget.id):
        raise DuplicateActiveBudgetError()
    
    for field, value in changes.items():
        setattr(budget, field, value)
    
    commit_changes(db, "update budget")
    db.refresh(budget)
    return budget


def delete_budget(db: Session, owner_id: str, budget_id: str) -> None:
    budget = get_owned(db, owner_id, budget_id)
    db.delete(budget)
    commit_changes(db, "delete budget")
    logger.info(f"Deleted budget {budget_id} of {owner_id}")
