"""Staff API router — admin only.

Adding a staff member also creates their login as ``staff{id}@hotel.com``.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.api.deps import get_db, require_admin
from hoteldesk.auth.passwords import hash_password
from hoteldesk.models.user import Role, Staff, User
from hoteldesk.schemas.back_office import StaffCreate, StaffResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/staff", tags=["staff"])


@router.get("", response_model=list[StaffResponse], summary="List staff")
async def list_staff(
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> list[dict]:
    result = await db.execute(
        select(Staff.id, Staff.name, Staff.phone, Staff.status, Staff.created_at, User.email)
        .outerjoin(User, and_(User.staff_id == Staff.id, User.role == Role.STAFF))
        .order_by(Staff.created_at.desc(), Staff.id.desc())
    )
    return [dict(row) for row in result.mappings().all()]


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED, summary="Add a staff member")
async def create_staff(
    body: StaffCreate,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> dict:
    staff = Staff(name=body.name.strip(), phone=body.phone, status="active")
    db.add(staff)
    await db.flush()

    login = User(
        name=staff.name,
        email=f"staff{staff.id}@hotel.com",
        hashed_password=hash_password(body.password),
        role=Role.STAFF,
        staff_id=staff.id,
    )
    db.add(login)
    await db.flush()
    await db.refresh(staff)

    logger.info("Staff %s added with login %s", staff.id, login.email)
    return {
        "id": staff.id,
        "name": staff.name,
        "phone": staff.phone,
        "status": staff.status,
        "email": login.email,
        "created_at": staff.created_at,
    }
