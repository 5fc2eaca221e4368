"""
Authentication routes for external identity sign-in.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.user import GoogleSignIn, AuthResponse, UserResponse
from app.core.security import create_access_token
from app.services.account_service import create_or_update_by_email

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/google", response_model=AuthResponse)
async def google_sign_in(identity: GoogleSignIn, db: Session = Depends(get_db)):
    """Get or create the account for a verified identity and issue a token."""
    user = create_or_update_by_email(
        db,
        email=identity.email,
        display_name=identity.display_name,
        photo_url=identity.photo_url,
        google_id=identity.google_id
    )
    access_token = create_access_token(data={"sub": user.id})
    
    return AuthResponse(user=UserResponse.model_validate(user), access_token=access_token)
