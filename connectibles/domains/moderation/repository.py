# connectibles/domains/moderation/repository.py
from typing import Optional

from sqlalchemy import and_, func, select

from connectibles.core.database import session_scope
from connectibles.domains.auth.models import User
from connectibles.domains.moderation.models import UserReport
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)


async def get_report(reporter_id: str, reported_user_id: str) -> Optional[UserReport]:
    async with session_scope() as db:
        result = await db.execute(
            select(UserReport).filter(
                and_(
                    UserReport.reporter_id == reporter_id,
                    UserReport.reported_user_id == reported_user_id,
                )
            )
        )
        return result.scalar_one_or_none()


async def save_report(reporter_id: str, reported_user_id: str, reason: Optional[str]) -> UserReport:
    async with session_scope() as db:
        report = UserReport(
            reporter_id=reporter_id,
            reported_user_id=reported_user_id,
            reason=reason,
        )
        db.add(report)
        await db.flush()
        return report


async def count_reports(reported_user_id: str) -> int:
    async with session_scope() as db:
        result = await db.execute(
            select(func.count(UserReport.id)).filter(
                UserReport.reported_user_id == reported_user_id
            )
        )
        return result.scalar_one()


async def ban_user(user_id: str) -> None:
    async with session_scope() as db:
        user = await db.get(User, user_id)
        if user:
            user.is_banned = True
            logger.info(f"User {user_id} banned")
