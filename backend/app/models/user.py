"""
User model: account identity, friend graph and sharing grants.
"""
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from app.db.base import Base, BaseModel


def _user_pair_table(name: str, left: str, right: str) -> Table:
    """Association table holding directed (left -> right) user pairs."""
    return Table(
        name,
        Base.metadata,
        Column(left, String(64), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        Column(right, String(64), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    )


# Friend edges are stored once per direction; both rows exist for every friendship.
friendships = _user_pair_table("friendships", "user_id", "friend_id")
friend_requests = _user_pair_table("friend_requests", "sender_id", "recipient_id")
transaction_shares = _user_pair_table("transaction_shares", "owner_id", "friend_id")
balance_shares = _user_pair_table("balance_shares", "owner_id", "friend_id")


class User(BaseModel):
    """Account record."""
    __tablename__ = "users"
    
    email = Column(String(255), unique=True, nullable=False, index=True)  # Always stored lowercased
    display_name = Column(String(200), nullable=False)
    photo_url = Column(String(500), nullable=False, default="")
    google_id = Column(String(255), unique=True, nullable=True)  # NULLs are not subject to the unique index
    share_with_friends = Column(Boolean, default=False, nullable=False)  # Legacy flag, gates nothing
    analytics_share_enabled = Column(Boolean, default=False, nullable=False)
    last_active_at = Column(DateTime, default=datetime.now, nullable=False)
    
    # Friend graph
    friends = relationship(
        "User",
        secondary=friendships,
        primaryjoin=lambda: User.id == friendships.c.user_id,
        secondaryjoin=lambda: User.id == friendships.c.friend_id,
    )
    sent_requests = relationship(
        "User",
        secondary=friend_requests,
        primaryjoin=lambda: User.id == friend_requests.c.sender_id,
        secondaryjoin=lambda: User.id == friend_requests.c.recipient_id,
        back_populates="received_requests",
    )
    received_requests = relationship(
        "User",
        secondary=friend_requests,
        primaryjoin=lambda: User.id == friend_requests.c.recipient_id,
        secondaryjoin=lambda: User.id == friend_requests.c.sender_id,
        back_populates="sent_requests",
    )
    
    # Per-friend grants extended by this user
    transaction_share_friends = relationship(
        "User",
        secondary=transaction_shares,
        primaryjoin=lambda: User.id == transaction_shares.c.owner_id,
        secondaryjoin=lambda: User.id == transaction_shares.c.friend_id,
    )
    balance_share_friends = relationship(
        "User",
        secondary=balance_shares,
        primaryjoin=lambda: User.id == balance_shares.c.owner_id,
        secondaryjoin=lambda: User.id == balance_shares.c.friend_id,
    )
    
    transactions = relationship("Transaction", back_populates="owner", cascade="all, delete-orphan")
    budgets = relationship("Budget", back_populates="owner", cascade="all, delete-orphan")
    
    @property
    def friend_ids(self):
        return [friend.id for friend in self.friends]
    
    @property
    def transaction_share_friend_ids(self):
        return [friend.id for friend in self.transaction_share_friends]
    
    @property
    def balance_share_friend_ids(self):
        return [friend.id for friend in self.balance_share_friends]
