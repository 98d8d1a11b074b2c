# connectibles/domains/auth/repository.py
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import delete, select

from connectibles.core.database import session_scope
from connectibles.domains.auth.models import User, VerificationCode
from connectibles.shared.utils.logger import get_logger
from connectibles.shared.utils.timeutils import utcnow

logger = get_logger(__name__)


async def get_user_by_id(user_id: str) -> Optional[User]:
    async with session_scope() as db:
        return await db.get(User, user_id)


async def get_user_by_email(email: str) -> Optional[User]:
    async with session_scope() as db:
        result = await db.execute(select(User).filter(User.email == email))
        return result.scalar_one_or_none()


async def get_users_by_ids(user_ids: Iterable[str]) -> List[User]:
    """Users for the given ids, in the order the ids were given. Missing ids are skipped."""
    ids = list(user_ids)
    if not ids:
        return []
    async with session_scope() as db:
        result = await db.execute(select(User).filter(User.id.in_(ids)))
        by_id = {user.id: user for user in result.scalars().all()}
    return [by_id[user_id] for user_id in ids if user_id in by_id]


async def list_users() -> List[User]:
    async with session_scope() as db:
        result = await db.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())


async def create_user(email: str, name: Optional[str] = None) -> User:
    async with session_scope() as db:
        user = User(
            email=email,
            name=name,
            interests=[],
            skills=[],
            connections=[],
            blocked_users=[],
            looking_for=[],
            email_verified_at=utcnow(),
        )
        db.add(user)
        await db.flush()
        logger.info(f"Created user {user.id} for {email}")
        return user


async def mark_email_verified(user_id: str) -> None:
    async with session_scope() as db:
        user = await db.get(User, user_id)
        if user:
            user.email_verified_at = utcnow()


async def set_role(user_id: str, role: str) -> None:
    async with session_scope() as db:
        user = await db.get(User, user_id)
        if user:
            user.role = role


async def save_verification_code(email: str, code_hash: str, expires_at: datetime) -> None:
    """Store the code for an email, replacing any earlier one."""
    async with session_scope() as db:
        await db.execute(delete(VerificationCode).where(VerificationCode.email == email))
        db.add(VerificationCode(email=email, code_hash=code_hash, expires_at=expires_at))


async def get_verification_code(email: str) -> Optional[VerificationCode]:
    async with session_scope() as db:
        result = await db.execute(
            select(VerificationCode).filter(VerificationCode.email == email)
        )
        return result.scalar_one_or_none()


async def delete_verification_code(email: str) -> None:
    async with session_scope() as db:
        await db.execute(delete(VerificationCode).where(VerificationCode.email == email))
