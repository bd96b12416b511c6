"""Pydantic v2 response schema for stored billing snapshots."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from hoteldesk.schemas.booking import AddOnLine, KitchenLine


class BillingResponse(BaseModel):
    id: int
    booking_id: int
    customer_id: int
    room_id: int
    check_in: datetime
    check_out: datetime
    room_price: Decimal
    advance_paid: Decimal
    add_ons: list[AddOnLine]
    kitchen_orders: list[KitchenLine]
    computed_amount: Decimal
    total_amount: Decimal
    total_overridden: bool
    balance: Decimal
    created_by_id: int | None = None
    created_by_name: str | None = None
    created_by_role: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
