"""Pydantic v2 request/response schemas for customer endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    contact: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    id_type: str | None = Field(None, max_length=50)
    id_number: str | None = Field(None, max_length=100)
    address: str | None = None


class CustomerUpdate(BaseModel):
    """Partial customer update. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    contact: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    id_type: str | None = Field(None, max_length=50)
    id_number: str | None = Field(None, max_length=100)
    address: str | None = None


class CustomerResponse(BaseModel):
    id: int
    name: str
    contact: str | None = None
    email: str | None = None
    id_type: str | None = None
    id_number: str | None = None
    address: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
