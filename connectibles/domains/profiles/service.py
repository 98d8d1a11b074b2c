from typing import List, Optional

from connectibles.core.config import settings
from connectibles.domains.auth import repository as user_repository
from connectibles.domains.auth.models import User
from connectibles.domains.profiles import repository
from connectibles.domains.profiles.entities import is_online, profile_completion
from connectibles.domains.profiles.schemas import OnlineStatus, ProfileUpdate
from connectibles.shared.exceptions import NotFound
from connectibles.shared.utils.logger import get_logger
from connectibles.shared.utils.timeutils import utcnow

logger = get_logger(__name__)


async def update_profile(user: User, patch: ProfileUpdate) -> User:
    fields = patch.model_dump(exclude_unset=True)
    updated = await repository.update_user_fields(user.id, fields)
    logger.info(f"Profile {user.id} updated: {sorted(fields)}")
    return updated


async def get_profile(user_id: str) -> User:
    user = await user_repository.get_user_by_id(user_id)
    if not user:
        raise NotFound("USER_NOT_FOUND", "That user does not exist")
    return user


def get_profile_completion(user: Optional[User]) -> int:
    if not user:
        return 0
    return profile_completion(user)


async def update_presence(user: User) -> None:
    await repository.touch_last_active(user.id)


async def is_user_online(user_id: str) -> bool:
    user = await user_repository.get_user_by_id(user_id)
    if not user:
        return False
    return is_online(user.last_active, utcnow(), settings.ONLINE_WINDOW_MINUTES)


async def get_online_statuses(user_ids: List[str]) -> List[OnlineStatus]:
    users = {u.id: u for u in await user_repository.get_users_by_ids(user_ids)}
    now = utcnow()
    return [
        OnlineStatus(
            user_id=user_id,
            is_online=user_id in users
            and is_online(users[user_id].last_active, now, settings.ONLINE_WINDOW_MINUTES),
        )
        for user_id in user_ids
    ]
