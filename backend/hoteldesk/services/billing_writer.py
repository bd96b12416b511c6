"""Persist the billing snapshot for a checkout.

Only called from inside the checkout transaction; it flushes but never
commits, so a failure here rolls back the whole checkout.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.models.billing import Billing
from hoteldesk.models.booking import Booking
from hoteldesk.schemas.booking import AddOnLine, KitchenLine
from hoteldesk.services.actor import Actor


async def write_billing(
    db: AsyncSession,
    *,
    booking: Booking,
    check_out: datetime,
    room_price: Decimal,
    add_ons: list[AddOnLine],
    kitchen_lines: list[KitchenLine],
    computed_amount: Decimal,
    total_amount: Decimal,
    total_overridden: bool,
    actor: Actor,
    actor_name: str,
) -> Billing:
    billing = Billing(
        booking_id=booking.id,
        customer_id=booking.customer_id,
        room_id=booking.room_id,
        check_in=booking.check_in,
        check_out=check_out,
        room_price=room_price,
        advance_paid=booking.advance_paid or Decimal("0"),
        add_ons=[line.model_dump(mode="json") for line in add_ons],
        kitchen_orders=[line.model_dump(mode="json") for line in kitchen_lines],
        computed_amount=computed_amount,
        total_amount=total_amount,
        total_overridden=total_overridden,
        balance=total_amount - (booking.advance_paid or Decimal("0")),
        created_by_id=actor.user_id,
        created_by_name=actor_name,
        created_by_role=actor.role,
    )
    db.add(billing)
    await db.flush()
    return billing
