# connectibles/domains/messages/repository.py
from typing import List, Optional

from sqlalchemy import and_, func, or_, select, update

from connectibles.core.database import session_scope
from connectibles.domains.auth.models import User
from connectibles.domains.connections.entities import with_member, without_member
from connectibles.domains.messages.models import Message


async def save_message(sender_id: str, receiver_id: str, body: str) -> Message:
    async with session_scope() as db:
        message = Message(sender_id=sender_id, receiver_id=receiver_id, body=body, read=False)
        db.add(message)
        await db.flush()
        return message


async def get_message(message_id: str) -> Optional[Message]:
    async with session_scope() as db:
        return await db.get(Message, message_id)


async def get_conversation(user_id: str, other_id: str) -> List[Message]:
    async with session_scope() as db:
        result = await db.execute(
            select(Message)
            .filter(
                or_(
                    and_(Message.sender_id == user_id, Message.receiver_id == other_id),
                    and_(Message.sender_id == other_id, Message.receiver_id == user_id),
                )
            )
            .order_by(Message.created_at)
        )
        return list(result.scalars().all())


async def mark_read(message_id: str) -> None:
    async with session_scope() as db:
        await db.execute(update(Message).where(Message.id == message_id).values(read=True))


async def count_unread(receiver_id: str) -> int:
    async with session_scope() as db:
        result = await db.execute(
            select(func.count(Message.id)).filter(
                Message.receiver_id == receiver_id, Message.read.is_(False)
            )
        )
        return result.scalar_one()


async def add_block(user_id: str, blocked_user_id: str) -> None:
    async with session_scope() as db:
        user = await db.get(User, user_id)
        user.blocked_users = with_member(user.blocked_users, blocked_user_id)


async def remove_block(user_id: str, blocked_user_id: str) -> None:
    async with session_scope() as db:
        user = await db.get(User, user_id)
        user.blocked_users = without_member(user.blocked_users, blocked_user_id)
