# connectibles/domains/matching/service.py
from typing import List, Optional, Set

from connectibles.core.config import settings
from connectibles.domains.auth import repository as user_repository
from connectibles.domains.auth.models import User
from connectibles.domains.connections import repository as connection_repository
from connectibles.domains.connections.entities import ConnectionStatus
from connectibles.domains.matching.entities import (
    Match,
    pick_explore,
    score_matches,
    score_reverse_matches,
)


async def _population(exclude: Set[str]) -> List[User]:
    users = await user_repository.list_users()
    return [u for u in users if not u.is_banned and u.id not in exclude]


async def _already_reached(user: User, statuses: Optional[List[ConnectionStatus]] = None) -> Set[str]:
    sent = await connection_repository.list_sent(user.id, statuses)
    return set(user.connections or []) | {r.receiver_id for r in sent}


async def get_matches(user: Optional[User]) -> List[Match]:
    """Top candidates by number of shared interests."""
    if not user or not user.interests:
        return []
    candidates = await _population(exclude={user.id})
    return score_matches(user, candidates, limit=settings.MATCH_LIMIT)


async def get_reverse_matches(user: Optional[User]) -> List[Match]:
    if not user or not user.interests:
        return []
    candidates = await _population(exclude=await _already_reached(user) | {user.id})
    return score_reverse_matches(user, candidates, limit=settings.REVERSE_MATCH_LIMIT)


async def get_explore_matches(user: Optional[User]) -> List[Match]:
    if not user:
        return []
    candidates = await _population(exclude=await _already_reached(user) | {user.id})
    return pick_explore(user, candidates, limit=settings.EXPLORE_LIMIT)
