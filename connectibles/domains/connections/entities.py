from enum import Enum
from typing import List


class ConnectionStatus(str, Enum):
    WAVED = "waved"
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RelationshipStatus(str, Enum):
    """How the caller relates to another user, as shown on a profile."""

    CONNECTED = "connected"
    PENDING = "pending"  # caller asked, waiting on the other side
    WAVED = "waved"
    INCOMING = "incoming"  # the other side asked the caller
    NONE = "none"


def with_member(ids: List[str], user_id: str) -> List[str]:
    """New list with user_id appended once."""
    ids = list(ids or [])
    if user_id not in ids:
        ids.append(user_id)
    return ids


def without_member(ids: List[str], user_id: str) -> List[str]:
    return [i for i in (ids or []) if i != user_id]


def blocks_between(user_a, user_b) -> bool:
    """True when either user has blocked the other."""
    return user_b.id in (user_a.blocked_users or []) or user_a.id in (user_b.blocked_users or [])
