# connectibles/domains/connections/service.py
"""
Connection state machine.

Per ordered (sender, receiver) pair: none -> waved -> pending -> accepted,
or pending -> rejected. A pending request in the opposite direction turns a
new request into a mutual connection straight away.
"""
from typing import Dict, List, Optional

from connectibles.core.database import session_scope
from connectibles.domains.auth import repository as user_repository
from connectibles.domains.auth.models import User
from connectibles.domains.auth.schemas import UserPublic
from connectibles.domains.connections import repository
from connectibles.domains.connections.entities import (
    ConnectionStatus,
    RelationshipStatus,
    blocks_between,
)
from connectibles.domains.notifications.entities import NotificationType
from connectibles.domains.notifications.service import notify
from connectibles.shared.exceptions import Conflict, Forbidden, InvalidRequest, NotFound
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)


def _display_name(user: User) -> str:
    return user.name or "Someone"


async def _get_counterpart(sender: User, receiver_id: str) -> User:
    receiver = await user_repository.get_user_by_id(receiver_id)
    if not receiver:
        raise NotFound("USER_NOT_FOUND", "That user does not exist")
    if blocks_between(sender, receiver):
        raise Forbidden("BLOCKED_USER", "You cannot interact with this user")
    return receiver


async def send_wave(sender: User, receiver_id: str) -> Dict:
    if sender.id == receiver_id:
        raise InvalidRequest("SELF_WAVE", "You cannot wave at yourself")

    receiver = await _get_counterpart(sender, receiver_id)
    if receiver_id in (sender.connections or []):
        raise Conflict("ALREADY_CONNECTED", "You are already connected with this user")

    existing = await repository.get_request(sender.id, receiver_id)
    if existing:
        if existing.status == ConnectionStatus.WAVED.value:
            raise Conflict("ALREADY_WAVED", "You already waved at this user")
        if existing.status == ConnectionStatus.ACCEPTED.value:
            raise Conflict("ALREADY_CONNECTED", "You are already connected with this user")
        if existing.status == ConnectionStatus.REJECTED.value:
            raise Conflict("ALREADY_PENDING", "Your earlier request to this user was declined")
        raise Conflict("ALREADY_PENDING", "A request to this user already exists")

    async with session_scope():
        request = await repository.create_request(sender.id, receiver_id, ConnectionStatus.WAVED)
        await notify(
            receiver.id,
            NotificationType.WAVE,
            f"{_display_name(sender)} waved at you! 👋",
            related_user_id=sender.id,
        )
    return {"request_id": request.id, "status": request.status}


async def send_connection_request(sender: User, receiver_id: str) -> Dict:
    if sender.id == receiver_id:
        raise InvalidRequest("SELF_CONNECT", "You cannot connect with yourself")

    receiver = await _get_counterpart(sender, receiver_id)
    if receiver_id in (sender.connections or []):
        raise Conflict("ALREADY_CONNECTED", "You are already connected with this user")

    existing = await repository.get_request(sender.id, receiver_id)
    if existing and existing.status == ConnectionStatus.ACCEPTED.value:
        raise Conflict("ALREADY_CONNECTED", "You are already connected with this user")
    if existing and existing.status == ConnectionStatus.PENDING.value:
        raise Conflict("ALREADY_PENDING", "Connection request already sent")

    reverse = await repository.get_request(receiver_id, sender.id)
    if reverse and reverse.status == ConnectionStatus.PENDING.value:
        async with session_scope():
            request = await repository.accept_reciprocal(sender.id, receiver_id, reverse.id)
            await notify(
                receiver.id,
                NotificationType.CONNECTION_ACCEPTED,
                f"You and {_display_name(sender)} are now connected!",
                related_user_id=sender.id,
            )
            await notify(
                sender.id,
                NotificationType.CONNECTION_ACCEPTED,
                f"You and {_display_name(receiver)} are now connected!",
                related_user_id=receiver.id,
            )
        return {"request_id": request.id, "status": ConnectionStatus.ACCEPTED.value}

    async with session_scope():
        if existing:
            # waved or rejected: reopen as a full request
            await repository.set_status(existing.id, ConnectionStatus.PENDING)
            request_id = existing.id
        else:
            request = await repository.create_request(sender.id, receiver_id, ConnectionStatus.PENDING)
            request_id = request.id

        await notify(
            receiver.id,
            NotificationType.CONNECTION_REQUEST,
            f"{_display_name(sender)} wants to connect with you",
            related_user_id=sender.id,
        )
    return {"request_id": request_id, "status": ConnectionStatus.PENDING.value}


async def _get_pending_for_receiver(user: User, request_id: str):
    request = await repository.get_request_by_id(request_id)
    if not request:
        raise NotFound("REQUEST_NOT_FOUND", "Connection request not found")
    if request.receiver_id != user.id:
        raise Forbidden("NOT_RECEIVER", "Only the receiver can respond to this request")
    if request.status != ConnectionStatus.PENDING.value:
        raise Conflict("NOT_PENDING", "This request is no longer pending")
    return request


async def accept_connection_request(user: User, request_id: str) -> str:
    request = await _get_pending_for_receiver(user, request_id)
    async with session_scope():
        await repository.accept_request(request.id)
        await notify(
            request.sender_id,
            NotificationType.CONNECTION_ACCEPTED,
            f"{_display_name(user)} accepted your connection request!",
            related_user_id=user.id,
        )
    return request.id


async def reject_connection_request(user: User, request_id: str) -> str:
    request = await _get_pending_for_receiver(user, request_id)
    await repository.set_status(request.id, ConnectionStatus.REJECTED)
    return request.id


async def remove_connection(user: User, other_id: str) -> None:
    if other_id not in (user.connections or []):
        raise NotFound("NOT_CONNECTED", "You are not connected with this user")
    await repository.unlink_users(user.id, other_id)
    logger.info(f"Connection {user.id} <-> {other_id} removed")


async def get_connection_requests(user: Optional[User]) -> List[Dict]:
    if not user:
        return []
    requests = await repository.list_received(user.id, ConnectionStatus.PENDING)
    senders = {
        u.id: u for u in await user_repository.get_users_by_ids(r.sender_id for r in requests)
    }
    return [
        {
            "id": r.id,
            "sender_id": r.sender_id,
            "status": r.status,
            "created_at": r.created_at,
            "sender": UserPublic.model_validate(senders[r.sender_id]).model_dump()
            if r.sender_id in senders
            else None,
        }
        for r in requests
    ]


async def get_connections(user: Optional[User]) -> List[User]:
    if not user:
        return []
    return await user_repository.get_users_by_ids(user.connections or [])


async def get_connection_status(user: Optional[User], other_id: str) -> Optional[RelationshipStatus]:
    if not user:
        return None
    if other_id in (user.connections or []):
        return RelationshipStatus.CONNECTED

    sent = await repository.get_request(user.id, other_id)
    if sent and sent.status == ConnectionStatus.PENDING.value:
        return RelationshipStatus.PENDING
    if sent and sent.status == ConnectionStatus.WAVED.value:
        return RelationshipStatus.WAVED

    received = await repository.get_request(other_id, user.id)
    if received and received.status == ConnectionStatus.PENDING.value:
        return RelationshipStatus.INCOMING
    return RelationshipStatus.NONE
