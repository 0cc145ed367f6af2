"""Role checks layered on top of token verification."""

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.exceptions import ForbiddenException
from src.models.enums import UserRole
from src.models.user import User
from src.modules.auth.auth import AuthenticatedUser, get_current_user


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> AuthenticatedUser:
    """Allow the request only when the caller's profile row has the admin role."""
    result = await db.execute(select(User.role).where(User.id == user.id))
    role = result.scalar_one_or_none()
    if role != UserRole.ADMIN.value:
        raise ForbiddenException("Admin access required")
    return user
