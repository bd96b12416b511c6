"""Customers CRUD API router."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.api.deps import get_current_active_user, get_db
from hoteldesk.exceptions import ConflictError, NotFoundError
from hoteldesk.models.booking import Booking
from hoteldesk.models.customer import Customer
from hoteldesk.models.user import User
from hoteldesk.schemas.auth import MessageResponse
from hoteldesk.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate

router = APIRouter(prefix="/api/customers", tags=["customers"])


async def _get_customer(db: AsyncSession, customer_id: int) -> Customer:
    customer = await db.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError("Customer not found")
    return customer


@router.get("", response_model=list[CustomerResponse], summary="List customers")
async def list_customers(
    search: str | None = Query(None, description="Search by name or contact (case-insensitive)"),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[Customer]:
    query = select(Customer)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Customer.name.ilike(pattern), Customer.contact.ilike(pattern)))
    result = await db.execute(query.order_by(Customer.id.desc()))
    return list(result.scalars().all())


@router.get("/{customer_id}", response_model=CustomerResponse, summary="Get a customer")
async def get_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Customer:
    return await _get_customer(db, customer_id)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED, summary="Create a customer")
async def create_customer(
    body: CustomerCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Customer:
    customer = Customer(**body.model_dump())
    db.add(customer)
    await db.flush()
    await db.refresh(customer)
    return customer


@router.put("/{customer_id}", response_model=CustomerResponse, summary="Update a customer")
async def update_customer(
    customer_id: int,
    body: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Customer:
    customer = await _get_customer(db, customer_id)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(customer, field, value)
    await db.flush()
    await db.refresh(customer)
    return customer


@router.delete("/{customer_id}", response_model=MessageResponse, summary="Delete a customer")
async def delete_customer(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> dict:
    """Delete a customer who has no bookings (409 otherwise)."""
    customer = await _get_customer(db, customer_id)
    has_bookings = await db.execute(
        select(func.count()).select_from(Booking).where(Booking.customer_id == customer_id)
    )
    if has_bookings.scalar_one() > 0:
        raise ConflictError("Customer has bookings and cannot be deleted")

    await db.delete(customer)
    await db.flush()
    return {"message": "Customer deleted"}
