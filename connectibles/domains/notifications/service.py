# connectibles/domains/notifications/service.py
from typing import Dict, List, Optional

from connectibles.core.config import settings
from connectibles.domains.auth import repository as user_repository
from connectibles.domains.auth.models import User
from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.notifications import repository
from connectibles.domains.notifications.entities import NotificationType
from connectibles.domains.notifications.models import Notification
from connectibles.shared.exceptions import NotFound
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)


async def notify(
    user_id: str,
    type: NotificationType,
    message: str,
    related_user_id: Optional[str] = None,
) -> Notification:
    """Internal: queue a notification for a user as a side effect of another action."""
    notification = await repository.create_notification(
        user_id=user_id,
        type=type.value,
        message=message,
        related_user_id=related_user_id,
    )
    logger.debug(f"Notification {type.value} -> {user_id}")
    return notification


def _serialize(notification: Notification, related: Optional[User]) -> Dict:
    return {
        "id": notification.id,
        "type": notification.type,
        "message": notification.message,
        "read": notification.read,
        "related_user_id": notification.related_user_id,
        "related_user": UserPublic.model_validate(related).model_dump() if related else None,
        "created_at": notification.created_at,
    }


async def get_notifications(user: Optional[User]) -> List[Dict]:
    if not user:
        return []
    notifications = await repository.list_for_user(user.id, settings.NOTIFICATION_PAGE_SIZE)
    related_ids = {n.related_user_id for n in notifications if n.related_user_id}
    related = {u.id: u for u in await user_repository.get_users_by_ids(related_ids)}
    return [_serialize(n, related.get(n.related_user_id)) for n in notifications]


async def get_unread_count(user: Optional[User]) -> int:
    if not user:
        return 0
    return await repository.count_unread(user.id)


async def _get_owned(user: User, notification_id: str) -> Notification:
    notification = await repository.get_notification(notification_id)
    if not notification or notification.user_id != user.id:
        raise NotFound("NOTIFICATION_NOT_FOUND", "Notification not found")
    return notification


async def mark_as_read(user: User, notification_id: str) -> str:
    await _get_owned(user, notification_id)
    await repository.mark_read(notification_id)
    return notification_id


async def mark_all_as_read(user: User) -> int:
    return await repository.mark_all_read(user.id)


async def delete_notification(user: User, notification_id: str) -> str:
    await _get_owned(user, notification_id)
    await repository.delete_notification(notification_id)
    return notification_id


async def delete_all_notifications(user: User) -> int:
    return await repository.delete_all_for_user(user.id)
