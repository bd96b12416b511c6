"""Pydantic v2 request/response schemas for the kitchen endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Menu items & categories
# ---------------------------------------------------------------------------


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(None, max_length=100)
    price: Decimal = Field(..., ge=0)
    stock: int | None = Field(None, ge=0)
    status: str | None = "Available"


class MenuItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, max_length=100)
    price: Decimal | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    status: str | None = None


class MenuItemResponse(BaseModel):
    id: int
    name: str
    category: str | None = None
    price: Decimal
    stock: int | None = None
    status: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Kitchen orders
# ---------------------------------------------------------------------------


class KitchenOrderCreate(BaseModel):
    booking_id: int
    item_id: int
    quantity: int = Field(1, ge=1)


class KitchenOrderStatusUpdate(BaseModel):
    """Settled is not accepted here; only checkout settles orders."""

    status: str = Field(..., pattern="^(Pending|Served|Cancelled)$")


class KitchenOrderResponse(BaseModel):
    id: int
    booking_id: int
    room_id: int | None = None
    item_id: int
    quantity: int
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class KitchenOrderListItem(BaseModel):
    """Kitchen order joined with room, customer and menu item."""

    id: int
    booking_id: int
    quantity: int
    status: str
    created_at: datetime
    room_number: str | None = None
    customer_name: str
    item_name: str
    price: Decimal
