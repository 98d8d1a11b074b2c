from datetime import timedelta
from typing import Optional

from connectibles.core.config import settings
from connectibles.domains.auth import otp, repository
from connectibles.domains.auth.models import User
from connectibles.shared.exceptions import AuthRequired, InvalidRequest
from connectibles.shared.utils.logger import get_logger
from connectibles.shared.utils.security import (
    create_access_token,
    decode_token,
    hash_code,
    verify_code,
)
from connectibles.shared.utils.timeutils import utcnow

logger = get_logger(__name__)


async def request_sign_in_code(email: str) -> dict:
    """Send a one-time sign-in code to an allow-listed campus address."""
    otp.ensure_allowed_domain(email)

    code = otp.generate_code()
    expires_at = utcnow() + timedelta(minutes=settings.OTP_TTL_MINUTES)
    await repository.save_verification_code(email, hash_code(code), expires_at)
    await otp.send_verification_email(email, code)

    return {"sent": True, "expires_in_seconds": settings.OTP_TTL_MINUTES * 60}


async def verify_sign_in_code(email: str, code: str) -> dict:
    """Exchange a valid code for a bearer token, creating the user on first sign-in."""
    otp.ensure_allowed_domain(email)

    stored = await repository.get_verification_code(email)
    if not stored or stored.expires_at < utcnow() or not verify_code(code, stored.code_hash):
        raise InvalidRequest("INVALID_CODE", "The sign-in code is invalid or has expired")
    await repository.delete_verification_code(email)

    user = await repository.get_user_by_email(email)
    is_new_user = user is None
    if is_new_user:
        user = await repository.create_user(email)
    else:
        await repository.mark_email_verified(user.id)

    access_token = create_access_token(data={"sub": user.id})
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user_id": user.id,
        "is_new_user": is_new_user,
    }


async def resolve_token(token: str) -> Optional[User]:
    payload = decode_token(token)
    if not payload or not payload.get("sub"):
        return None
    return await repository.get_user_by_id(payload["sub"])


async def validate_token(token: str) -> User:
    user = await resolve_token(token)
    if not user:
        raise AuthRequired("Invalid or expired session")
    return user
