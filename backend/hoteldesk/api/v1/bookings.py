"""Bookings API router — CRUD plus checkout.

Creation runs the availability check; checkout hands off to
:class:`~hoteldesk.services.checkout_service.CheckoutService`, which owns its
own transaction.
"""

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.api.deps import get_current_active_user, get_current_actor, get_db
from hoteldesk.exceptions import NotFoundError
from hoteldesk.models.booking import Booking
from hoteldesk.models.customer import Customer
from hoteldesk.models.room import Room
from hoteldesk.models.user import User
from hoteldesk.schemas.auth import MessageResponse
from hoteldesk.schemas.booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingListItem,
    BookingResponse,
    BookingStatusUpdate,
    CheckoutRequest,
    CheckoutResponse,
)
from hoteldesk.services import booking_service
from hoteldesk.services.actor import Actor
from hoteldesk.services.checkout_service import CheckoutService, get_checkout_service

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get(
    "",
    response_model=list[BookingListItem],
    summary="List bookings with customer and room details",
)
async def list_bookings(
    status_filter: str | None = Query(None, alias="status", description="Filter by booking status"),
    room_id: int | None = Query(None, description="Filter by room"),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[dict]:
    """Return bookings, newest first."""
    query = (
        select(
            Booking.id,
            Booking.booking_id,
            Booking.check_in,
            Booking.check_out,
            Booking.status,
            Booking.price,
            Customer.name.label("customer_name"),
            Customer.contact.label("customer_contact"),
            Room.room_number,
            Room.category.label("room_category"),
        )
        .join(Customer, Booking.customer_id == Customer.id)
        .join(Room, Booking.room_id == Room.id)
    )
    if status_filter is not None:
        query = query.where(Booking.status == status_filter)
    if room_id is not None:
        query = query.where(Booking.room_id == room_id)

    result = await db.execute(query.order_by(Booking.id.desc()))
    return [dict(row) for row in result.mappings().all()]


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking by internal id",
)
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Booking:
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


@router.post(
    "",
    response_model=BookingCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> BookingCreatedResponse:
    """Create a booking and mark the room Booked (or Occupied when checked in).

    Returns 409 if the room is already held for an overlapping stay.
    """
    booking = await booking_service.create_booking(db, body, actor)
    return BookingCreatedResponse(
        id=booking.id,
        booking_id=booking.booking_id,
        message="Booking created and room status updated",
    )


@router.put(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Update a booking's status",
)
async def update_booking(
    booking_id: int,
    body: BookingStatusUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Booking:
    return await booking_service.update_booking_status(db, booking_id, body.status)


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    summary="Delete an active booking",
)
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> dict:
    await booking_service.delete_booking(db, booking_id)
    return {"message": "Booking deleted"}


@router.post(
    "/{booking_id}/checkout",
    response_model=CheckoutResponse,
    summary="Check out a booking and generate its bill",
)
async def checkout_booking(
    booking_id: int,
    body: CheckoutRequest | None = Body(None),
    actor: Actor = Depends(get_current_actor),
    service: CheckoutService = Depends(get_checkout_service),
) -> CheckoutResponse:
    """Close the stay, settle kitchen orders and write exactly one billing row.

    Returns 404 for an unknown booking and 409 if it is (or concurrently
    became) checked out.
    """
    summary = await service.checkout(booking_id, actor, body)
    return CheckoutResponse(message="Checked out successfully", billing_summary=summary)
