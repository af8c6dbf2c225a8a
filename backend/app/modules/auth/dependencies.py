from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, Callable, Awaitable

from app.core.database import get_db
from app.core.exceptions import UnauthorizedError, ForbiddenError
from app.core.logging_config import set_user_id
from app.core.security import decode_token
from app.core.types import is_valid_uuid
from app.models.user import User, UserRole

# auto_error=False so a missing header is reported as 401 by us, not 403 by FastAPI
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    if not credentials or not credentials.credentials:
        raise UnauthorizedError("No token, authorization denied")

    payload = decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token type")

    user_id = payload.get("sub")
    if not user_id or not is_valid_uuid(user_id):
        raise UnauthorizedError("Token is not valid")

    result = await db.execute(
        select(User).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()

    if not user:
        raise UnauthorizedError("Token is not valid")

    if not user.is_active:
        raise ForbiddenError("User account is inactive")

    set_user_id(str(user.id))
    request.state.user_id = str(user.id)
    return user


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[User]]:
    """
    Grant access to specific roles.

    Usage:
        @router.get("/admin-only")
        async def handler(user: User = Depends(require_roles(UserRole.ADMIN))):
            ...
    """
    allowed = set(roles)

    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise ForbiddenError("Not authorized for this role")
        return current_user

    return dependency


# Admin back office: admin or superadmin
get_current_admin = require_roles(UserRole.ADMIN, UserRole.SUPERADMIN)
