"""
Account directory: identity records and the friend graph.

Every operation that touches two accounts mutates both rows in the same
session and commits once, so a failure leaves neither side changed.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from app.core.exceptions import (
    AlreadyFriendsError,
    InvalidInputError,
    InvalidRequestError,
    NoPendingRequestError,
    NotFoundError,
    RequestPendingError,
)
from app.db.session import commit_changes
from app.models.user import User

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User:
    """Load an account or raise NotFoundError."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def search_by_email(db: Session, email: str) -> User:
    """Exact, case-insensitive email lookup."""
    user = find_by_email(db, email)
    if not user:
        raise NotFoundError("User not found")
    return user


def create_or_update_by_email(
    db: Session,
    email: str,
    display_name: str,
    photo_url: Optional[str] = None,
    google_id: Optional[str] = None
) -> User:
    """Create the account on first sign-in, otherwise refresh its profile."""
    user = find_by_email(db, email)
    
    if not user:
        user = User(
            email=email.strip().lower(),
            display_name=display_name,
            photo_url=photo_url or "",
            google_id=google_id or None
        )
        db.add(user)
        logger.info(f"Creating account for {user.email}")
    else:
        user.display_name = display_name
        user.photo_url = photo_url or user.photo_url
        user.google_id = google_id or user.google_id
        user.last_active_at = datetime.now()
    
    commit_changes(db, "save account")
    db.refresh(user)
    return user


def update_profile(
    db: Session,
    user: User,
    display_name: Optional[str] = None,
    photo_url: Optional[str] = None,
    share_with_friends: Optional[bool] = None
) -> User:
    """Apply the supplied profile fields."""
    if display_name is not None:
        if not display_name.strip():
            raise InvalidInputError("display_name must not be empty")
        user.display_name = display_name.strip()
    if photo_url is not None:
        user.photo_url = photo_url
    if share_with_friends is not None:
        user.share_with_friends = share_with_friends
    
    commit_changes(db, "update profile")
    db.refresh(user)
    return user


def _friends_among(user: User, friend_ids: Iterable[str]) -> List[User]:
    """Resolve ids to the user's current friends, rejecting anyone else."""
    friends_by_id = {friend.id: friend for friend in user.friends}
    resolved = []
    for friend_id in dict.fromkeys(friend_ids):
        if friend_id not in friends_by_id:
            raise InvalidInputError(f"User {friend_id} is not a friend")
        resolved.append(friends_by_id[friend_id])
    return resolved


def update_sharing(
    db: Session,
    user: User,
    analytics_share_enabled: Optional[bool] = None,
    transaction_share_friend_ids: Optional[List[str]] = None,
    balance_share_friend_ids: Optional[List[str]] = None
) -> User:
    """Replace the supplied sharing grants. Grants may only name current friends."""
    transaction_friends = None
    balance_friends = None
    if transaction_share_friend_ids is not None:
        transaction_friends = _friends_among(user, transaction_share_friend_ids)
    if balance_share_friend_ids is not None:
        balance_friends = _friends_among(user, balance_share_friend_ids)
    
    if analytics_share_enabled is not None:
        user.analytics_share_enabled = analytics_share_enabled
    if transaction_friends is not None:
        user.transaction_share_friends = transaction_friends
    if balance_friends is not None:
        user.balance_share_friends = balance_friends
    
    commit_changes(db, "update sharing settings")
    db.refresh(user)
    return user


def send_friend_request(db: Session, from_id: str, to_id: str) -> User:
    """Record a pending request from ``from_id`` to ``to_id``."""
    if from_id == to_id:
        raise InvalidRequestError()
    
    sender = get_user(db, from_id)
    recipient = get_user(db, to_id)
    
    if recipient in sender.friends:
        raise AlreadyFriendsError()
    if recipient in sender.sent_requests or recipient in sender.received_requests:
        raise RequestPendingError()
    
    # back_populates mirrors this into recipient.received_requests
    sender.sent_requests.append(recipient)
    commit_changes(db, "send friend request")
    logger.info(f"Friend request {from_id} -> {to_id}")
    return recipient


def accept_request(db: Session, user_id: str, requester_id: str) -> User:
    """Accept a pending request and create the symmetric friend edge."""
    user = get_user(db, user_id)
    requester = next((u for u in user.received_requests if u.id == requester_id), None)
    if requester is None:
        raise NoPendingRequestError()
    
    user.received_requests.remove(requester)
    if requester not in user.friends:
        user.friends.append(requester)
    if user not in requester.friends:
        requester.friends.append(user)
    
    commit_changes(db, "accept friend request")
    logger.info(f"Friend request {requester_id} -> {user_id} accepted")
    return requester


def decline_request(db: Session, user_id: str, requester_id: str) -> None:
    """Drop a pending request without creating a friendship."""
    user = get_user(db, user_id)
    requester = next((u for u in user.received_requests if u.id == requester_id), None)
    if requester is None:
        raise NoPendingRequestError()
    
    user.received_requests.remove(requester)
    commit_changes(db, "decline friend request")
    logger.info(f"Friend request {requester_id} -> {user_id} declined")


def _unlink(user: User, other: User) -> None:
    """Remove the edge and any grants from ``user`` towards ``other``."""
    for collection in (user.friends, user.transaction_share_friends, user.balance_share_friends):
        if other in collection:
            collection.remove(other)


def remove_friend(db: Session, user_id: str, friend_id: str) -> User:
    """Remove the friend edge from both sides; absent edges are ignored."""
    user = get_user(db, user_id)
    friend = db.query(User).filter(User.id == friend_id).first()
    
    if friend is not None:
        _unlink(user, friend)
        _unlink(friend, user)
        commit_changes(db, "remove friend")
        logger.info(f"Friendship {user_id} <-> {friend_id} removed")
    return user


def list_friends(db: Session, user_id: str) -> List[User]:
    return list(get_user(db, user_id).friends)


def list_incoming_requests(db: Session, user_id: str) -> List[User]:
    return list(get_user(db, user_id).received_requests)


def list_outgoing_requests(db: Session, user_id: str) -> List[User]:
    return list(get_user(db, user_id).sent_requests)
