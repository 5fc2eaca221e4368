"""
Shared route dependencies for authentication and access checks.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from app.core.exceptions import ForbiddenError
from app.core.security import decode_access_token
from app.db.session import get_db
from app.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the signed-in user from the bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception
    
    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise credentials_exception
    
    user = db.query(User).filter(User.id == payload["sub"]).first()
    if not user:
        raise credentials_exception
    return user


def ensure_self(user_id: str, current_user: User) -> None:
    """Routes under /users/{user_id} act on the caller's own data only."""
    if user_id != current_user.id:
        raise ForbiddenError("Access denied to another user's data")
