# connectibles/domains/admin/repository.py
from typing import Dict

from sqlalchemy import delete

from connectibles.core.database import session_scope
from connectibles.domains.auth.models import User, VerificationCode
from connectibles.domains.connections.models import ConnectionRequest
from connectibles.domains.feed.models import CollaborationPost, Event, GossipMessage, SpillPost
from connectibles.domains.games.models import GameInvitation, GameSession, GameStat
from connectibles.domains.messages.models import Message
from connectibles.domains.moderation.models import UserReport
from connectibles.domains.notifications.models import Notification
from connectibles.domains.truth_dare.models import TruthDareSession

# Dependents first, users last
WIPE_ORDER = (
    Notification,
    Message,
    ConnectionRequest,
    SpillPost,
    CollaborationPost,
    Event,
    GossipMessage,
    GameInvitation,
    GameSession,
    GameStat,
    TruthDareSession,
    UserReport,
    VerificationCode,
    User,
)


async def delete_everything() -> Dict[str, int]:
    counts = {}
    async with session_scope() as db:
        for model in WIPE_ORDER:
            result = await db.execute(delete(model))
            counts[model.__tablename__] = result.rowcount or 0
    return counts
