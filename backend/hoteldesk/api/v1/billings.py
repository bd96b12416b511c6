"""Billings API router — read-only access to checkout snapshots."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.api.deps import get_current_active_user, get_db
from hoteldesk.exceptions import NotFoundError
from hoteldesk.models.billing import Billing
from hoteldesk.models.user import User
from hoteldesk.schemas.billing import BillingResponse

router = APIRouter(prefix="/api/billings", tags=["billings"])


@router.get("", response_model=list[BillingResponse], summary="List billings")
async def list_billings(
    booking_id: int | None = Query(None, description="Filter by internal booking id"),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[Billing]:
    query = select(Billing)
    if booking_id is not None:
        query = query.where(Billing.booking_id == booking_id)
    result = await db.execute(query.order_by(Billing.id.desc()))
    return list(result.scalars().all())


@router.get("/{billing_id}", response_model=BillingResponse, summary="Get a billing")
async def get_billing(
    billing_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Billing:
    billing = await db.get(Billing, billing_id)
    if billing is None:
        raise NotFoundError("Billing not found")
    return billing
