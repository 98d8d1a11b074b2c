# connectibles/domains/profiles/repository.py
from typing import Any, Dict, Optional

from connectibles.core.database import session_scope
from connectibles.domains.auth.models import User
from connectibles.shared.utils.timeutils import utcnow


async def update_user_fields(user_id: str, fields: Dict[str, Any]) -> Optional[User]:
    async with session_scope() as db:
        user = await db.get(User, user_id)
        if not user:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        return user


async def touch_last_active(user_id: str) -> None:
    async with session_scope() as db:
        user = await db.get(User, user_id)
        if user:
            user.last_active = utcnow()
