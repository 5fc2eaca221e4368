"""
Decides what a viewer may see of another account.

These functions only read an ``AccountSnapshot``; they never touch the
database. Friendship is required for every grant.
"""
from dataclasses import dataclass
from typing import FrozenSet
from app.models.user import User


@dataclass(frozen=True)
class AccountSnapshot:
    id: str
    friend_ids: FrozenSet[str]
    transaction_share_friend_ids: FrozenSet[str]
    balance_share_friend_ids: FrozenSet[str]
    analytics_share_enabled: bool


def snapshot(user: User) -> AccountSnapshot:
    """Capture the sharing-relevant state of an account."""
    return AccountSnapshot(
        id=user.id,
        friend_ids=frozenset(user.friend_ids),
        transaction_share_friend_ids=frozenset(user.transaction_share_friend_ids),
        balance_share_friend_ids=frozenset(user.balance_share_friend_ids),
        analytics_share_enabled=bool(user.analytics_share_enabled),
    )


def is_friend(viewer_id: str, owner: AccountSnapshot) -> bool:
    return viewer_id in owner.friend_ids


def can_view_transactions(viewer_id: str, owner: AccountSnapshot) -> bool:
    return is_friend(viewer_id, owner) and viewer_id in owner.transaction_share_friend_ids


def can_view_balance(viewer_id: str, owner: AccountSnapshot) -> bool:
    return is_friend(viewer_id, owner) and viewer_id in owner.balance_share_friend_ids


def can_view_analytics(viewer_id: str, owner: AccountSnapshot) -> bool:
    # Account-wide flag, not per friend
    return is_friend(viewer_id, owner) and owner.analytics_share_enabled
