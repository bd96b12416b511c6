"""Pydantic v2 request/response schemas for room endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

_STATUS_PATTERN = "^(Available|Booked|Occupied|Maintenance|Cleaning)$"


class RoomCreate(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=20)
    category: str | None = Field(None, max_length=100)
    capacity: int = Field(2, ge=1)
    price_per_night: Decimal = Field(..., ge=0)
    status: str = Field("Available", pattern=_STATUS_PATTERN)
    amenities: dict | None = None
    add_ons: dict | None = None


class RoomUpdate(BaseModel):
    """Partial room update. All fields optional."""

    room_number: str | None = Field(None, min_length=1, max_length=20)
    category: str | None = Field(None, max_length=100)
    capacity: int | None = Field(None, ge=1)
    price_per_night: Decimal | None = Field(None, ge=0)
    status: str | None = Field(None, pattern=_STATUS_PATTERN)
    amenities: dict | None = None
    add_ons: dict | None = None


class RoomResponse(BaseModel):
    id: int
    room_number: str
    category: str | None = None
    capacity: int
    price_per_night: Decimal
    status: str
    amenities: dict | None = None
    add_ons: dict | None = None

    model_config = ConfigDict(from_attributes=True)


class RoomWithOccupancy(RoomResponse):
    """Room plus the number of people held by its active bookings."""

    current_occupancy: int = 0


class ActiveRoom(BaseModel):
    """A room currently held by a Confirmed or Checked-in booking."""

    room_id: int
    room_number: str
    capacity: int
    booking_db_id: int
    booking_code: str
    people_count: int
    check_in: datetime
    customer_id: int
    customer_name: str
