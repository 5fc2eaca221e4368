"""
Sharing facade: friend-scoped views of another user's ledger.
"""
import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.exceptions import NotFoundError, NotFriendsError, NotSharedError
from app.core.utils import round_half_up
from app.models.transaction import Transaction
from app.models.user import User
from app.services import permissions
from app.services.ledger_service import list_by_owner, list_by_owner_in_window

logger = logging.getLogger(__name__)


def _authorize(
    db: Session,
    viewer_id: str,
    owner_id: str,
    check: Callable[[str, permissions.AccountSnapshot], bool],
    denied_message: str
) -> None:
    owner = db.query(User).filter(User.id == owner_id).first()
    if not owner:
        raise NotFoundError("Friend not found")
    
    snapshot = permissions.snapshot(owner)
    if not permissions.is_friend(viewer_id, snapshot):
        raise NotFriendsError()
    if not check(viewer_id, snapshot):
        logger.debug(f"{viewer_id} denied view of {owner_id}: {denied_message}")
        raise NotSharedError(denied_message)


def summarize_balance(transactions: Iterable[Transaction]) -> Dict[str, float]:
    total_income = 0.0
    total_expense = 0.0
    for t in transactions:
        if t.is_expense:
            total_expense += t.amount
        else:
            total_income += t.amount
    return {
        "balance": total_income - total_expense,
        "total_income": total_income,
        "total_expense": total_expense,
    }


def expense_breakdown(expenses: Iterable[Transaction]) -> Dict[str, object]:
    """
    Per-tag share of total expense as whole percentages.
    A transaction counts in full once per tag it carries, repeats included, so the
    percentages need not add up to 100.
    """
    tag_totals = defaultdict(float)
    total_expense = 0.0
    for t in expenses:
        total_expense += t.amount
        for tag in t.tags:
            tag_totals[tag] += t.amount
    
    tag_percentages = {
        tag: round_half_up(amount / total_expense * 100) if total_expense > 0 else 0
        for tag, amount in tag_totals.items()
    }
    return {"tag_percentages": tag_percentages, "total_expense": total_expense}


def get_friend_transactions(db: Session, viewer_id: str, owner_id: str) -> List[Transaction]:
    """Most recent transactions of a friend who granted transaction access."""
    _authorize(
        db, viewer_id, owner_id,
        permissions.can_view_transactions,
        "Friend has not shared transactions with you"
    )
    return list_by_owner(db, owner_id, limit=settings.FRIEND_TRANSACTIONS_LIMIT)


def get_friend_balance(db: Session, viewer_id: str, owner_id: str) -> Dict[str, float]:
    """All-time income, expense and balance of a friend who granted balance access."""
    _authorize(
        db, viewer_id, owner_id,
        permissions.can_view_balance,
        "Friend has not shared balance with you"
    )
    return summarize_balance(list_by_owner_in_window(db, owner_id))


def get_friend_analytics(db: Session, viewer_id: str, owner_id: str) -> Dict[str, object]:
    """Expense breakdown by tag of a friend who enabled analytics sharing."""
    _authorize(
        db, viewer_id, owner_id,
        permissions.can_view_analytics,
        "Friend has not shared analytics"
    )
    return expense_breakdown(list_by_owner_in_window(db, owner_id, expense_only=True))
