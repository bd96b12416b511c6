"""Auth API router — login, staff list, profile, change password."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.auth.dependencies import get_current_active_user
from hoteldesk.auth.jwt import create_user_token
from hoteldesk.auth.passwords import hash_password, verify_password
from hoteldesk.database import get_db
from hoteldesk.models.user import Role, Staff, User
from hoteldesk.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    StaffListItem,
    UserProfile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


async def _profile(db: AsyncSession, user: User) -> UserProfile:
    profile = UserProfile.model_validate(user)
    if user.role == Role.STAFF and user.staff_id is not None:
        staff = await db.get(Staff, user.staff_id)
        if staff is not None:
            profile.name = staff.name
            profile.phone = staff.phone
    return profile


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)) -> LoginResponse:
    """Authenticate with email and password.

    Staff logins are refused while their staff record is inactive.
    """
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(body.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is inactive")

    if user.role == Role.STAFF:
        staff = await db.get(Staff, user.staff_id) if user.staff_id is not None else None
        if staff is None or staff.status != "active":
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Staff inactive or not found")

    logger.info("User %s logged in as %s", user.id, user.role)
    return LoginResponse(token=create_user_token(user), user=await _profile(db, user))


@router.get("/staff-list", response_model=list[StaffListItem])
async def staff_list(db: AsyncSession = Depends(get_db)) -> list[Staff]:
    """Active staff names for the login screen. No authentication required."""
    result = await db.execute(select(Staff).where(Staff.status == "active").order_by(Staff.name))
    return list(result.scalars().all())


@router.get("/profile", response_model=UserProfile)
async def profile(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UserProfile:
    """Return the authenticated user's profile."""
    return await _profile(db, current_user)


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> dict:
    if not verify_password(body.current_password, current_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    current_user.hashed_password = hash_password(body.new_password)
    await db.flush()
    return {"message": "Password changed successfully. Please login again."}
