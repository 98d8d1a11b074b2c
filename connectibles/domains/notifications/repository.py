from typing import List, Optional

from sqlalchemy import delete, func, select, update

from connectibles.core.database import session_scope
from connectibles.domains.notifications.models import Notification


async def create_notification(
    user_id: str,
    type: str,
    message: str,
    related_user_id: Optional[str] = None,
) -> Notification:
    async with session_scope() as db:
        notification = Notification(
            user_id=user_id,
            type=type,
            message=message,
            related_user_id=related_user_id,
            read=False,
        )
        db.add(notification)
        await db.flush()
        return notification


async def get_notification(notification_id: str) -> Optional[Notification]:
    async with session_scope() as db:
        return await db.get(Notification, notification_id)


async def list_for_user(user_id: str, limit: int) -> List[Notification]:
    async with session_scope() as db:
        result = await db.execute(
            select(Notification)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())


async def list_by_type(user_id: str, type: str) -> List[Notification]:
    async with session_scope() as db:
        result = await db.execute(
            select(Notification)
            .filter(Notification.user_id == user_id, Notification.type == type)
            .order_by(Notification.created_at)
        )
        return list(result.scalars().all())


async def count_unread(user_id: str) -> int:
    async with session_scope() as db:
        result = await db.execute(
            select(func.count(Notification.id)).filter(
                Notification.user_id == user_id, Notification.read.is_(False)
            )
        )
        return result.scalar_one()


async def mark_read(notification_id: str) -> None:
    async with session_scope() as db:
        await db.execute(
            update(Notification).where(Notification.id == notification_id).values(read=True)
        )


async def mark_all_read(user_id: str) -> int:
    async with session_scope() as db:
        result = await db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.read.is_(False))
            .values(read=True)
        )
        return result.rowcount


async def delete_notification(notification_id: str) -> None:
    async with session_scope() as db:
        await db.execute(delete(Notification).where(Notification.id == notification_id))


async def delete_all_for_user(user_id: str) -> int:
    async with session_scope() as db:
        result = await db.execute(delete(Notification).where(Notification.user_id == user_id))
        return result.rowcount
