"""
Friend graph routes and friend-scoped data views.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import FriendRequestCreate, UserSummary
from app.schemas.transaction import TransactionResponse, BalanceResponse, AnalyticsResponse
from app.api.dependencies import get_current_user, ensure_self
from app.services import account_service, sharing_service

router = APIRouter(prefix="/users/{user_id}", tags=["friends"])


@router.post("/friend-requests", response_model=UserSummary, status_code=status.HTTP_201_CREATED)
async def send_friend_request(
    user_id: str,
    request_data: FriendRequestCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Send a friend request."""
    ensure_self(user_id, current_user)
    return account_service.send_friend_request(db, user_id, request_data.friend_id)


@router.get("/friend-requests", response_model=List[UserSummary])
async def get_incoming_requests(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List users who sent a pending request to the caller."""
    ensure_self(user_id, current_user)
    return account_service.list_incoming_requests(db, user_id)


@router.get("/friend-requests/sent", response_model=List[UserSummary])
async def get_outgoing_requests(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List users the caller has a pending request to."""
    ensure_self(user_id, current_user)
    return account_service.list_outgoing_requests(db, user_id)


@router.post("/friend-requests/{requester_id}/accept", response_model=UserSummary)
async def accept_friend_request(
    user_id: str,
    requester_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Accept a pending request."""
    ensure_self(user_id, current_user)
    return account_service.accept_request(db, user_id, requester_id)


@router.post("/friend-requests/{requester_id}/decline", status_code=status.HTTP_204_NO_CONTENT)
async def decline_friend_request(
    user_id: str,
    requester_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Decline a pending request."""
    ensure_self(user_id, current_user)
    account_service.decline_request(db, user_id, requester_id)
    return None


@router.get("/friends", response_model=List[UserSummary])
async def get_friends(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List friends."""
    ensure_self(user_id, current_user)
    return account_service.list_friends(db, user_id)


@router.delete("/friends/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_friend(
    user_id: str,
    friend_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a friend. Removing someone who is not a friend is not an error."""
    ensure_self(user_id, current_user)
    account_service.remove_friend(db, user_id, friend_id)
    return None


@router.get("/friends/{friend_id}/transactions", response_model=List[TransactionResponse])
async def get_friend_transactions(
    user_id: str,
    friend_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a friend's recent transactions if shared with the caller."""
    ensure_self(user_id, current_user)
    return sharing_service.get_friend_transactions(db, user_id, friend_id)


@router.get("/friends/{friend_id}/balance", response_model=BalanceResponse)
async def get_friend_balance(
    user_id: str,
    friend_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a friend's balance if shared with the caller."""
    ensure_self(user_id, current_user)
    return sharing_service.get_friend_balance(db, user_id, friend_id)


@router.get("/friends/{friend_id}/analytics", response_model=AnalyticsResponse)
async def get_friend_analytics(
    user_id: str,
    friend_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a friend's expense breakdown by tag if analytics sharing is on."""
    ensure_self(user_id, current_user)
    return sharing_service.get_friend_analytics(db, user_id, friend_id)
