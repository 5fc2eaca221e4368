"""
User profile and sharing settings routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Union
from app.db.session import get_db
from app.schemas.user import UserResponse, UserSummary, UserUpdate, SharingUpdate
from app.models.user import User
from app.api.dependencies import get_current_user, ensure_self
from app.services import account_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.get("/search/{email}", response_model=UserSummary)
async def search_user(
    email: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Find a user by email (case-insensitive)."""
    return account_service.search_by_email(db, email)


@router.get("/{user_id}", response_model=Union[UserResponse, UserSummary])
async def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get user by ID. Friend lists and sharing grants are only shown to their owner."""
    user = account_service.get_user(db, user_id)
    if user.id != current_user.id:
        return UserSummary.model_validate(user)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update own profile."""
    ensure_self(user_id, current_user)
    return account_service.update_profile(
        db,
        current_user,
        display_name=user_data.display_name,
        photo_url=user_data.photo_url,
        share_with_friends=user_data.share_with_friends
    )


@router.put("/{user_id}/sharing", response_model=UserResponse)
async def update_sharing(
    user_id: str,
    sharing: SharingUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set which friends may see transactions and balance, and whether analytics are shared."""
    ensure_self(user_id, current_user)
    return account_service.update_sharing(
        db,
        current_user,
        analytics_share_enabled=sharing.analytics_share_enabled,
        transaction_share_friend_ids=sharing.transaction_share_friend_ids,
        balance_share_friend_ids=sharing.balance_share_friend_ids
    )
