# connectibles/domains/auth/otp.py
import httpx

from connectibles.core.config import settings
from connectibles.shared.exceptions import ConnectiblesError, InvalidRequest
from connectibles.shared.utils.logger import get_logger
from connectibles.shared.utils.security import generate_numeric_code

logger = get_logger(__name__)


def generate_code() -> str:
    return generate_numeric_code(6)


def ensure_allowed_domain(email: str) -> None:
    domain = settings.ALLOWED_EMAIL_DOMAIN.lower()
    if not email.lower().endswith(domain):
        raise InvalidRequest(
            "INVALID_EMAIL_DOMAIN",
            f"Only {domain} email addresses are allowed to sign up.",
        )


async def send_verification_email(email: str, code: str) -> None:
    if settings.MOCK_EMAIL_DELIVERY:
        logger.debug(f"Mock delivery of sign-in code for {email}")
        return

    headers = {}
    if settings.OTP_API_KEY:
        headers["x-api-key"] = settings.OTP_API_KEY

    try:
        async with httpx.AsyncClient(timeout=settings.OTP_REQUEST_TIMEOUT) as client:
            response = await client.post(
                settings.OTP_SERVICE_URL,
                json={"to": email, "otp": code, "appName": settings.OTP_APP_NAME},
                headers=headers,
            )
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"Sign-in code delivery to {email} failed: {e}")
        raise ConnectiblesError(
            "EMAIL_DELIVERY_FAILED", "Could not send the sign-in code", status_code=502
        ) from e
