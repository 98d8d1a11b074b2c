# connectibles/domains/matching/entities.py
"""
Interest-overlap scoring.

Pure functions over anything exposing the profile attributes (`id`,
`interests`, `skills`, `location`, `connections`), so they run the same
against ORM rows and plain test doubles.
"""
import random
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence


@dataclass
class Match:
    user: Any
    score: float
    shared_interests: List[str]
    shared_skills: List[str] = field(default_factory=list)
    same_location: bool = False
    mutual_connections_count: int = 0


def shared_items(mine: Sequence[str], theirs: Sequence[str]) -> List[str]:
    """Items of `mine` present in `theirs`, keeping `mine`'s order and repeats."""
    theirs = theirs or []
    return [item for item in (mine or []) if item in theirs]


def mutual_connections(mine: Sequence[str], theirs: Sequence[str]) -> int:
    return len(shared_items(mine, theirs))


def same_location(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a and b and a.lower() == b.lower())


def score_matches(current_user, candidates: Sequence[Any], limit: int = 10) -> List[Match]:
    """Rank candidates by how many of the current user's interests they share.

    Candidates without interests, the current user, and zero scores are left out.
    Ties keep candidate order (stable sort).
    """
    if not current_user.interests:
        return []

    matches = []
    for candidate in candidates:
        if candidate.id == current_user.id or not candidate.interests:
            continue
        shared = shared_items(current_user.interests, candidate.interests)
        if not shared:
            continue
        matches.append(
            Match(
                user=candidate,
                score=len(shared),
                shared_interests=shared,
                mutual_connections_count=mutual_connections(
                    current_user.connections, candidate.connections
                ),
            )
        )

    matches.sort(key=lambda m: m.score, reverse=True)
    return matches[:limit]


def score_reverse_matches(current_user, candidates: Sequence[Any], limit: int = 15) -> List[Match]:
    """Rank candidates by how interested *they* would be in the current user.

    One point per interest of theirs the current user shares, half a point per
    shared skill, two for the same location.
    """
    if not current_user.interests:
        return []

    matches = []
    for candidate in candidates:
        if candidate.id == current_user.id or not candidate.interests:
            continue
        interests = shared_items(candidate.interests, current_user.interests)
        skills = shared_items(candidate.skills, current_user.skills)
        located = same_location(current_user.location, candidate.location)
        score = len(interests) + len(skills) * 0.5 + (2 if located else 0)
        if score <= 0:
            continue
        matches.append(
            Match(
                user=candidate,
                score=score,
                shared_interests=interests,
                shared_skills=skills,
                same_location=located,
                mutual_connections_count=mutual_connections(
                    current_user.connections, candidate.connections
                ),
            )
        )

    matches.sort(key=lambda m: m.score, reverse=True)
    return matches[:limit]


def pick_explore(current_user, candidates: Sequence[Any], limit: int = 10, rng: random.Random = None) -> List[Match]:
    rng = rng or random.Random()
    pool = [c for c in candidates if c.id != current_user.id]
    picked = rng.sample(pool, min(limit, len(pool)))
    return [
        Match(
            user=c,
            score=0,
            shared_interests=[],
            mutual_connections_count=mutual_connections(current_user.connections, c.connections),
        )
        for c in picked
    ]
