# connectibles/domains/connections/repository.py
from typing import List, Optional

from sqlalchemy import and_, delete, or_, select

from connectibles.core.database import session_scope
from connectibles.domains.auth.models import User
from connectibles.domains.connections.entities import (
    ConnectionStatus,
    with_member,
    without_member,
)
from connectibles.domains.connections.models import ConnectionRequest
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)


async def get_request(sender_id: str, receiver_id: str) -> Optional[ConnectionRequest]:
    async with session_scope() as db:
        result = await db.execute(
            select(ConnectionRequest).filter(
                and_(
                    ConnectionRequest.sender_id == sender_id,
                    ConnectionRequest.receiver_id == receiver_id,
                )
            )
        )
        return result.scalar_one_or_none()


async def get_request_by_id(request_id: str) -> Optional[ConnectionRequest]:
    async with session_scope() as db:
        return await db.get(ConnectionRequest, request_id)


async def create_request(sender_id: str, receiver_id: str, status: ConnectionStatus) -> ConnectionRequest:
    async with session_scope() as db:
        request = ConnectionRequest(
            sender_id=sender_id,
            receiver_id=receiver_id,
            status=status.value,
        )
        db.add(request)
        await db.flush()
        return request


async def set_status(request_id: str, status: ConnectionStatus) -> None:
    async with session_scope() as db:
        request = await db.get(ConnectionRequest, request_id)
        if request:
            request.status = status.value


async def list_received(receiver_id: str, status: ConnectionStatus) -> List[ConnectionRequest]:
    async with session_scope() as db:
        result = await db.execute(
            select(ConnectionRequest)
            .filter(
                ConnectionRequest.receiver_id == receiver_id,
                ConnectionRequest.status == status.value,
            )
            .order_by(ConnectionRequest.created_at.desc())
        )
        return list(result.scalars().all())


async def list_sent(sender_id: str, statuses: Optional[List[ConnectionStatus]] = None) -> List[ConnectionRequest]:
    async with session_scope() as db:
        query = select(ConnectionRequest).filter(ConnectionRequest.sender_id == sender_id)
        if statuses:
            query = query.filter(ConnectionRequest.status.in_([s.value for s in statuses]))
        result = await db.execute(query)
        return list(result.scalars().all())


async def _link_users(db, user_a_id: str, user_b_id: str) -> None:
    user_a = await db.get(User, user_a_id)
    user_b = await db.get(User, user_b_id)
    # Whole-list assignment so the JSON columns are flagged dirty
    if user_a:
        user_a.connections = with_member(user_a.connections, user_b_id)
    if user_b:
        user_b.connections = with_member(user_b.connections, user_a_id)


async def accept_request(request_id: str) -> Optional[ConnectionRequest]:
    """Mark a request accepted and link both users."""
    async with session_scope() as db:
        request = await db.get(ConnectionRequest, request_id)
        if not request:
            return None
        request.status = ConnectionStatus.ACCEPTED.value
        await _link_users(db, request.sender_id, request.receiver_id)
        logger.info(f"Connection {request.sender_id} <-> {request.receiver_id} accepted")
        return request


async def accept_reciprocal(sender_id: str, receiver_id: str, reverse_request_id: str) -> ConnectionRequest:
    """The receiver already asked the sender: resolve both directions to accepted."""
    async with session_scope() as db:
        reverse = await db.get(ConnectionRequest, reverse_request_id)
        reverse.status = ConnectionStatus.ACCEPTED.value

        result = await db.execute(
            select(ConnectionRequest).filter(
                ConnectionRequest.sender_id == sender_id,
                ConnectionRequest.receiver_id == receiver_id,
            )
        )
        forward = result.scalar_one_or_none()
        if forward:
            forward.status = ConnectionStatus.ACCEPTED.value
        else:
            forward = ConnectionRequest(
                sender_id=sender_id,
                receiver_id=receiver_id,
                status=ConnectionStatus.ACCEPTED.value,
            )
            db.add(forward)

        await _link_users(db, sender_id, receiver_id)
        await db.flush()
        logger.info(f"Reciprocal requests {sender_id} <-> {receiver_id} resolved to a connection")
        return forward


async def unlink_users(user_a_id: str, user_b_id: str) -> None:
    """Drop a connection and forget the requests between the pair."""
    async with session_scope() as db:
        user_a = await db.get(User, user_a_id)
        user_b = await db.get(User, user_b_id)
        if user_a:
            user_a.connections = without_member(user_a.connections, user_b_id)
        if user_b:
            user_b.connections = without_member(user_b.connections, user_a_id)
        await db.execute(
            delete(ConnectionRequest).where(
                or_(
                    and_(
                        ConnectionRequest.sender_id == user_a_id,
                        ConnectionRequest.receiver_id == user_b_id,
                    ),
                    and_(
                        ConnectionRequest.sender_id == user_b_id,
                        ConnectionRequest.receiver_id == user_a_id,
                    ),
                )
            )
        )
