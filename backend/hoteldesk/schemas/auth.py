"""Pydantic v2 request/response schemas for authentication endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Schema for email/password login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class UserProfile(BaseModel):
    """The logged-in account as the frontend sees it."""

    id: int
    name: str
    email: str
    role: str
    staff_id: int | None = None
    phone: str | None = None

    model_config = ConfigDict(from_attributes=True)


class StaffListItem(BaseModel):
    """An active staff member shown on the login screen."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserProfile


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
