# connectibles/domains/moderation/service.py
from typing import Dict, Optional

from connectibles.core.config import settings
from connectibles.core.database import session_scope
from connectibles.domains.auth import repository as user_repository
from connectibles.domains.auth.models import User
from connectibles.domains.moderation import repository
from connectibles.domains.moderation.entities import escalation_for
from connectibles.domains.notifications.entities import NotificationType
from connectibles.domains.notifications.service import notify
from connectibles.shared.exceptions import Conflict, InvalidRequest, NotFound
from connectibles.shared.utils.logger import get_logger

logger = get_logger(__name__)


async def report_user(reporter: User, reported_user_id: str, reason: Optional[str] = None) -> Dict:
    """File one report and apply the escalation for the target's new total."""
    if reporter.id == reported_user_id:
        raise InvalidRequest("SELF_REPORT", "You cannot report yourself")

    target = await user_repository.get_user_by_id(reported_user_id)
    if not target:
        raise NotFound("USER_NOT_FOUND", "That user does not exist")

    # Report, ban and notice land together or not at all
    async with session_scope():
        if await repository.get_report(reporter.id, reported_user_id):
            raise Conflict("ALREADY_REPORTED", "You have already reported this user")

        await repository.save_report(reporter.id, reported_user_id, reason)
        report_count = await repository.count_reports(reported_user_id)

        escalation = escalation_for(report_count, settings.REPORT_BAN_THRESHOLD)
        if escalation:
            if escalation.bans:
                await repository.ban_user(reported_user_id)
                notification_type = NotificationType.ACCOUNT_BANNED
            else:
                notification_type = NotificationType.REPORT_WARNING
            await notify(reported_user_id, notification_type, escalation.message)

    if escalation:
        logger.info(
            f"User {reported_user_id} reached {report_count} reports: {escalation.level.value}"
        )

    return {"report_count": report_count}


async def get_report_count(user_id: str) -> int:
    return await repository.count_reports(user_id)


async def has_reported(user: Optional[User], reported_user_id: str) -> bool:
    if not user:
        return False
    return await repository.get_report(user.id, reported_user_id) is not None
