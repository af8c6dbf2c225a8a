from fastapi import APIRouter, Depends, status, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from app.core.database import get_db
from app.core.config import Settings, get_settings
from app.core.exceptions import InvalidRequestError, UnauthorizedError, ForbiddenError
from app.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
)
from app.core.logging_config import logger, set_user_id
from app.core.rate_limiter import auth_rate_limit
from app.models.user import User, UserRole
from app.schemas.auth import (
    UserRegister,
    UserLogin,
    UserResponse,
    AuthResponse,
    FcmTokenUpdate,
)
from app.modules.auth.dependencies import get_current_user, get_current_admin


router = APIRouter()


def _apply_admin_list(user: User, settings: Settings) -> None:
    """Promote accounts listed in ADMIN_EMAILS"""
    if user.email.lower() in settings.ADMIN_EMAILS and user.role == UserRole.USER:
        user.role = UserRole.ADMIN
        user.is_admin = True


def _token_response(user: User) -> AuthResponse:
    token = create_access_token({
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
    })
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@auth_rate_limit()
async def register(
    request: Request,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Create an account and return a session token (rate limited)"""
    client_ip = request.client.host if request.client else "unknown"

    # Check if email already exists
    result = await db.execute(
        select(User).where(User.email == user_data.email)
    )
    if result.scalar_one_or_none():
        logger.log_auth_event(
            event="register",
            success=False,
            user_email=user_data.email,
            reason="Email already registered",
            client_ip=client_ip
        )
        raise InvalidRequestError("User already exists", field="email")

    result = await db.execute(
        select(User).where(User.registration_no == user_data.registration_no)
    )
    if result.scalar_one_or_none():
        logger.log_auth_event(
            event="register",
            success=False,
            user_email=user_data.email,
            reason="Registration number already registered",
            client_ip=client_ip
        )
        raise InvalidRequestError(
            "User with this registration number already exists",
            field="registration_no",
        )

    user = User(
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        name=user_data.name,
        registration_no=user_data.registration_no,
        branch=user_data.branch.value,
        semester=user_data.semester,
        mobile=user_data.mobile,
        role=UserRole.USER,
        is_admin=False,
    )
    _apply_admin_list(user, settings)

    db.add(user)
    await db.commit()
    await db.refresh(user)

    set_user_id(str(user.id))
    logger.log_auth_event(
        event="register",
        success=True,
        user_email=user.email,
        client_ip=client_ip,
        user_role=user.role.value
    )

    return _token_response(user)


@router.post("/login", response_model=AuthResponse)
@auth_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Login user (rate limited)"""
    client_ip = request.client.host if request.client else "unknown"

    result = await db.execute(
        select(User).where(User.email == credentials.email.lower())
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise UnauthorizedError("Invalid credentials")

    if not user.is_active:
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Account inactive",
            client_ip=client_ip
        )
        raise ForbiddenError("Account is inactive")

    if user.email in settings.ADMIN_EMAILS and user.role == UserRole.USER:
        _apply_admin_list(user, settings)
        await db.commit()

    set_user_id(str(user.id))
    logger.log_auth_event(
        event="login",
        success=True,
        user_email=user.email,
        client_ip=client_ip,
        user_role=user.role.value
    )

    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user info"""
    return current_user


@router.post("/logout")
async def logout():
    """Tokens are stateless; the client discards its copy"""
    return {"message": "Logged out successfully"}


@router.put("/fcm-token")
async def update_fcm_token(
    payload: FcmTokenUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Store (or clear) the caller's device notification token"""
    current_user.fcm_token = payload.token
    await db.commit()

    logger.info(f"[Auth] Device token {'updated' if payload.token else 'cleared'} for {current_user.email}")
    return {"message": "FCM token updated successfully"}


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """All accounts, newest first (admin only)"""
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return result.scalars().all()
