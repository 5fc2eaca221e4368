"""
Ledger store: transaction records and their time-windowed queries.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from app.core.exceptions import ConflictError, NotFoundError, PersistenceError
from app.db.session import commit_changes
from app.models.transaction import Transaction, TransactionTag
from app.schemas.transaction import TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)


def _owned_query(db: Session, owner_id: str, expense_only: bool = False):
    query = db.query(Transaction).options(
        selectinload(Transaction.tag_entries)
    ).filter(Transaction.owner_id == owner_id)
    if expense_only:
        query = query.filter(Transaction.is_expense.is_(True))
    return query


def list_by_owner(
    db: Session,
    owner_id: str,
    limit: Optional[int] = None,
    newest_first: bool = True
) -> List[Transaction]:
    """List a user's transactions ordered by date."""
    order = Transaction.date.desc() if newest_first else Transaction.date.asc()
    query = _owned_query(db, owner_id).order_by(order, Transaction.created_at.desc())
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def list_by_owner_in_window(
    db: Session,
    owner_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    expense_only: bool = False
) -> List[Transaction]:
    """List transactions dated within [start, end]; open bounds are unbounded."""
    query = _owned_query(db, owner_id, expense_only)
    if start is not None:
        query = query.filter(Transaction.date >= start)
    if end is not None:
        query = query.filter(Transaction.date <= end)
    return query.order_by(Transaction.date.desc()).all()


def list_by_owner_with_tag(
    db: Session,
    owner_id: str,
    tag: str,
    expense_only: bool = True,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None
) -> List[Transaction]:
    """List transactions carrying ``tag`` at least once, optionally windowed."""
    query = _owned_query(db, owner_id, expense_only).filter(
        Transaction.tag_entries.any(TransactionTag.tag == tag)
    )
    if start is not None:
        query = query.filter(Transaction.date >= start)
    if end is not None:
        query = query.filter(Transaction.date <= end)
    return query.order_by(Transaction.date.desc()).all()


def get_owned(db: Session, owner_id: str, transaction_id: str) -> Transaction:
    """Load a transaction only if it belongs to ``owner_id``."""
    transaction = _owned_query(db, owner_id).filter(Transaction.id == transaction_id).first()
    if not transaction:
        raise NotFoundError("Transaction not found")
    return transaction


def _find_by_id(db: Session, transaction_id: str) -> Optional[Transaction]:
    return db.query(Transaction).filter(Transaction.id == transaction_id).first()


def _existing_for_owner(existing: Transaction, owner_id: str) -> Tuple[Transaction, bool]:
    if existing.owner_id != owner_id:
        raise ConflictError("Transaction id already in use")
    return existing, False


def create_transaction(db: Session, owner_id: str, data: TransactionCreate) -> Tuple[Transaction, bool]:
    """
    Create a transaction for ``owner_id``.
    Returns (transaction, created). A client id already stored for this owner
    returns the stored record unchanged with created=False, including when a
    concurrent create with the same id wins the insert.
    """
    if data.id:
        existing = _find_by_id(db, data.id)
        if existing is not None:
            return _existing_for_owner(existing, owner_id)
    
    transaction = Transaction(
        owner_id=owner_id,
        title=data.title,
        amount=data.amount,
        is_expense=data.is_expense,
        tags=data.tags,
        description=data.description or "",
        date=data.date or datetime.now()
    )
    if data.id:
        transaction.id = data.id
    db.add(transaction)
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        existing = _find_by_id(db, data.id) if data.id else None
        if existing is None:
            logger.error(f"Failed to create transaction: {e}", exc_info=True)
            raise PersistenceError("Failed to create transaction") from e
        logger.info(f"Transaction {data.id} was created concurrently; returning stored record")
        return _existing_for_owner(existing, owner_id)
    
    commit_changes(db, "create transaction")
    db.refresh(transaction)
    return transaction, True


def update_transaction(
    db: Session,
    owner_id: str,
    transaction_id: str,
    data: TransactionUpdate
) -> Transaction:
    """Apply the supplied fields to an owned transaction."""
    transaction = get_owned(db, owner_id, transaction_id)
    
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(transaction, field, value)
    transaction.updated_at = datetime.now()
    
    commit_changes(db, "update transaction")
    db.refresh(transaction)
    return transaction


def delete_transaction(db: Session, owner_id: str, transaction_id: str) -> None:
    transaction = get_owned(db, owner_id, transaction_id)
    db.delete(transaction)
    commit_changes(db, "delete transaction")
    logger.debug(f"Deleted transaction {transaction_id} of {owner_id}")
