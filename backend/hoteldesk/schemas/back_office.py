"""Pydantic v2 schemas for GST settings, the add-on price list, expenses and staff."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# GST
# ---------------------------------------------------------------------------


class GSTSettingUpdate(BaseModel):
    category: str = Field(..., min_length=1, max_length=50)
    gst_rate: Decimal = Field(Decimal("0"), ge=0, le=100)
    is_enabled: bool = False


class GSTSettingResponse(BaseModel):
    id: int
    category: str
    gst_rate: Decimal
    is_enabled: bool
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Add-ons
# ---------------------------------------------------------------------------


class AddOnCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0)


class AddOnUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    price: Decimal | None = Field(None, ge=0)


class AddOnResponse(BaseModel):
    id: int
    name: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Expenses
# ---------------------------------------------------------------------------


class ExpenseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0)
    category: str | None = Field(None, max_length=100)
    expense_date: date


class ExpenseResponse(BaseModel):
    id: int
    title: str
    amount: Decimal
    category: str | None = None
    expense_date: date
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Staff
# ---------------------------------------------------------------------------


class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)


class StaffResponse(BaseModel):
    id: int
    name: str
    phone: str | None = None
    status: str
    email: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
