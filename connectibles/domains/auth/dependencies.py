from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from connectibles.domains.auth.models import User
from connectibles.shared.exceptions import AuthRequired, Forbidden
from .service import resolve_token, validate_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> User:
    if not creds or creds.scheme.lower() != "bearer":
        raise AuthRequired()
    return await validate_token(creds.credentials)


async def get_optional_user(
    creds: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> Optional[User]:
    """Read paths degrade to empty results instead of failing."""
    if not creds or creds.scheme.lower() != "bearer":
        return None
    return await resolve_token(creds.credentials)


async def get_active_user(user: User = Depends(get_current_user)) -> User:
    if user.is_banned:
        raise Forbidden("USER_BANNED", "Your account has been suspended")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise Forbidden("ADMIN_REQUIRED", "Administrator access required")
    return user
