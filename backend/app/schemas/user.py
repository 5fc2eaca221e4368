"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr, Field, constr, field_validator
from typing import List, Optional
from datetime import datetime


class GoogleSignIn(BaseModel):
    """Identity tuple verified by the external identity provider."""
    email: EmailStr
    display_name: str = Field(..., max_length=200)
    photo_url: Optional[str] = Field(None, max_length=500)
    google_id: Optional[str] = Field(None, max_length=255)
    
    @field_validator("display_name")
    @classmethod
    def display_name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("display_name must not be empty")
        return v.strip()


class UserUpdate(BaseModel):
    """Schema for profile update; only supplied fields change."""
    display_name: Optional[str] = Field(None, max_length=200)
    photo_url: Optional[str] = Field(None, max_length=500)
    share_with_friends: Optional[bool] = None


class SharingUpdate(BaseModel):
    """Schema for sharing grant update; only supplied fields change."""
    analytics_share_enabled: Optional[bool] = None
    transaction_share_friend_ids: Optional[List[constr(max_length=64)]] = None
    balance_share_friend_ids: Optional[List[constr(max_length=64)]] = None


class UserSummary(BaseModel):
    """Public part of an account shown to other users."""
    id: str
    email: str
    display_name: str
    photo_url: str
    
    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    """Schema for user response."""
    friend_ids: List[str] = []
    share_with_friends: bool
    analytics_share_enabled: bool
    transaction_share_friend_ids: List[str] = []
    balance_share_friend_ids: List[str] = []
    created_at: datetime
    last_active_at: datetime
    
    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Schema for sign-in response."""
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class FriendRequestCreate(BaseModel):
    """Schema for sending a friend request."""
    friend_id: str = Field(..., max_length=64)
