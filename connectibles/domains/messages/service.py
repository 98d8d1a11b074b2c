from typing import List, Optional

from connectibles.domains.auth import repository as user_repository
from connectibles.domains.auth.models import User
from connectibles.domains.messages import repository
from connectibles.domains.messages.models import Message
from connectibles.shared.exceptions import Conflict, Forbidden, InvalidRequest, NotFound
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)


async def send_message(sender: User, receiver_id: str, body: str) -> Message:
    receiver = await user_repository.get_user_by_id(receiver_id)
    if not receiver:
        raise NotFound("USER_NOT_FOUND", "That user does not exist")
    if sender.id in (receiver.blocked_users or []):
        raise Forbidden("BLOCKED", "You cannot send messages to this user")
    return await repository.save_message(sender.id, receiver_id, body)


async def get_conversation(user: Optional[User], other_id: str) -> List[Message]:
    if not user:
        return []
    return await repository.get_conversation(user.id, other_id)


async def mark_message_read(user: User, message_id: str) -> str:
    message = await repository.get_message(message_id)
    if not message or message.receiver_id != user.id:
        raise NotFound("MESSAGE_NOT_FOUND", "Message not found")
    await repository.mark_read(message_id)
    return message_id


async def get_unread_message_count(user: Optional[User]) -> int:
    if not user:
        return 0
    return await repository.count_unread(user.id)


async def block_user(user: User, blocked_user_id: str) -> None:
    if user.id == blocked_user_id:
        raise InvalidRequest("SELF_BLOCK", "You cannot block yourself")
    if blocked_user_id in (user.blocked_users or []):
        raise Conflict("ALREADY_BLOCKED", "User is already blocked")
    if not await user_repository.get_user_by_id(blocked_user_id):
        raise NotFound("USER_NOT_FOUND", "That user does not exist")
    await repository.add_block(user.id, blocked_user_id)
    logger.info(f"User {user.id} blocked {blocked_user_id}")


async def unblock_user(user: User, blocked_user_id: str) -> None:
    if blocked_user_id not in (user.blocked_users or []):
        raise NotFound("NOT_BLOCKED", "User is not blocked")
    await repository.remove_block(user.id, blocked_user_id)


def is_user_blocked(user: Optional[User], other_id: str) -> bool:
    if not user:
        return False
    return other_id in (user.blocked_users or [])
