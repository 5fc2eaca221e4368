"""
Transaction management routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from app.core.config import settings
from app.db.session import get_db
from app.models.user import User
from app.schemas.transaction import TransactionCreate, TransactionUpdate, TransactionResponse
from app.api.dependencies import get_current_user, ensure_self
from app.services import ledger_service

router = APIRouter(prefix="/users/{user_id}/transactions", tags=["transactions"])


@router.get("", response_model=List[TransactionResponse])
async def get_transactions(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get own transactions, newest first."""
    ensure_self(user_id, current_user)
    return ledger_service.list_by_owner(db, user_id, limit=settings.OWN_TRANSACTIONS_LIMIT)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    user_id: str,
    transaction_data: TransactionCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a transaction. Re-sending a known id returns the stored record with 200."""
    ensure_self(user_id, current_user)
    transaction, created = ledger_service.create_transaction(db, user_id, transaction_data)
    if not created:
        response.status_code = status.HTTP_200_OK
    return transaction


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    user_id: str,
    transaction_id: str,
    transaction_data: TransactionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an own transaction."""
    ensure_self(user_id, current_user)
    return ledger_service.update_transaction(db, user_id, transaction_id, transaction_data)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    user_id: str,
    transaction_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an own transaction."""
    ensure_self(user_id, current_user)
    ledger_service.delete_transaction(db, user_id, transaction_id)
    return None
