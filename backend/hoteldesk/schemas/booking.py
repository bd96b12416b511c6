"""Pydantic v2 request/response schemas for booking and checkout endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hoteldesk.timeutils import to_hotel_time

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a new booking.

    ``check_in`` defaults to now; ``check_out`` may be left open. ``price``
    defaults to the room's nightly rate.
    """

    booking_id: str = Field(..., min_length=1, max_length=64)
    customer_id: int
    room_id: int
    check_in: datetime | None = None
    check_out: datetime | None = None
    status: str = Field("Confirmed", pattern="^(Confirmed|Checked-in)$")
    price: Decimal | None = Field(None, ge=0)
    advance_paid: Decimal = Field(Decimal("0"), ge=0)
    people_count: int = Field(1, ge=1)
    add_ons: Any = None

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that check_out is strictly after check_in when both are given."""
        check_in = to_hotel_time(self.check_in)
        check_out = to_hotel_time(self.check_out)
        if check_in is not None and check_out is not None and check_out <= check_in:
            raise ValueError("check_out must be after check_in")
        return self


class BookingStatusUpdate(BaseModel):
    """Only the status of a booking can be edited; checkout has its own endpoint."""

    status: str = Field(..., pattern="^(Confirmed|Checked-in|Checked-out)$")


class CheckoutRequest(BaseModel):
    """Optional checkout overrides.

    ``add_ons`` and ``total_amount`` are deliberately loose: malformed add-ons
    are ignored and a non-numeric total falls back to the computed one.
    """

    check_out: datetime | None = None
    add_ons: Any = None
    total_amount: Any = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Full booking row."""

    id: int
    booking_id: str
    customer_id: int
    room_id: int
    check_in: datetime
    check_out: datetime | None = None
    status: str
    price: Decimal
    advance_paid: Decimal
    people_count: int
    add_ons: list | None = None
    created_by_id: int | None = None
    created_by_name: str | None = None
    created_by_role: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingListItem(BaseModel):
    """Booking joined with its customer and room for list views."""

    id: int
    booking_id: str
    check_in: datetime
    check_out: datetime | None = None
    status: str
    price: Decimal
    customer_name: str
    customer_contact: str | None = None
    room_number: str
    room_category: str | None = None

    model_config = ConfigDict(from_attributes=True)


class BookingCreatedResponse(BaseModel):
    id: int
    booking_id: str
    message: str


class AddOnLine(BaseModel):
    """A normalized add-on charge."""

    description: str
    amount: Decimal


class KitchenLine(BaseModel):
    """Kitchen consumption for one menu item, summed over a stay."""

    item_id: int
    item_name: str
    item_price: Decimal
    quantity: int
    line_total: Decimal


class ActorInfo(BaseModel):
    id: int
    name: str
    role: str


class BillingSummary(BaseModel):
    """Returned by checkout once the billing snapshot is committed."""

    billing_id: int
    booking_id: str
    booking_db_id: int
    customer_id: int
    room_id: int
    check_in: datetime
    check_out: datetime
    room_price: Decimal
    add_ons: list[AddOnLine]
    kitchen_orders: list[KitchenLine]
    computed_amount: Decimal
    total_amount: Decimal
    total_overridden: bool
    advance_paid: Decimal
    balance: Decimal
    checked_out_by: ActorInfo


class CheckoutResponse(BaseModel):
    message: str
    billing_summary: BillingSummary
