"""
Admin account management

- PUT /admin/users/{id}/role    assign user / admin / superadmin
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import TechfestError, InvalidRequestError, UserNotFoundError, ServerError
from app.core.logging_config import logger
from app.core.types import is_valid_uuid
from app.models.user import User, UserRole, ADMIN_ROLES
from app.modules.auth.dependencies import get_current_admin
from app.schemas.auth import UserRoleUpdate, UserRoleResponse, UserResponse


router = APIRouter()

VALID_ROLES = {role.value for role in UserRole}


@router.put("/users/{user_id}/role", response_model=UserRoleResponse)
async def update_user_role(
    user_id: str,
    payload: UserRoleUpdate,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Change an account's role; is_admin follows the role"""
    if payload.role not in VALID_ROLES:
        raise InvalidRequestError("Invalid role specified", field="role")

    user = await db.get(User, user_id) if is_valid_uuid(user_id) else None
    if not user:
        raise UserNotFoundError(user_id)

    try:
        user.role = UserRole(payload.role)
        user.is_admin = user.role in ADMIN_ROLES
        await db.commit()
        await db.refresh(user)

        logger.info(f"[Admin] {admin.email} set role of {user.email} to {user.role.value}")
        return UserRoleResponse(data=UserResponse.model_validate(user))

    except TechfestError:
        raise
    except Exception as e:
        await db.rollback()
        logger.log_error_with_context(e, "update_user_role", user_id=user_id)
        raise ServerError("Error updating user role")
