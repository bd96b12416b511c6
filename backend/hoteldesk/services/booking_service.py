"""Booking lifecycle outside of checkout: creation, status changes, deletion.

These run inside the request-scoped session from ``get_db``; the room's
status is kept in step with the bookings that hold it.
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.exceptions import ConflictError, NotFoundError, ValidationFailedError
from hoteldesk.models.booking import Booking, BookingStatus
from hoteldesk.models.customer import Customer
from hoteldesk.models.kitchen import KitchenOrder
from hoteldesk.models.room import Room, RoomStatus
from hoteldesk.schemas.booking import BookingCreate
from hoteldesk.services.actor import Actor, resolve_actor_name
from hoteldesk.services.add_ons import parse_add_ons
from hoteldesk.services.availability import ensure_room_available
from hoteldesk.timeutils import hotel_now, to_hotel_time

logger = logging.getLogger(__name__)

_ROOM_STATUS_FOR_BOOKING = {
    BookingStatus.CONFIRMED: RoomStatus.BOOKED,
    BookingStatus.CHECKED_IN: RoomStatus.OCCUPIED,
}


async def create_booking(db: AsyncSession, body: BookingCreate, actor: Actor) -> Booking:
    """Create a booking after checking references, capacity and availability.

    Raises:
        NotFoundError: customer or room does not exist.
        ValidationFailedError: too many occupants, or check-out not after check-in.
        ConflictError: duplicate booking code, or the room is taken for the dates.
    """
    customer = await db.get(Customer, body.customer_id)
    if customer is None:
        raise NotFoundError("Customer not found")
    room = await db.get(Room, body.room_id)
    if room is None:
        raise NotFoundError("Room not found")

    if body.people_count > room.capacity:
        raise ValidationFailedError(
            f"Room {room.room_number} holds at most {room.capacity} people",
        )

    check_in = to_hotel_time(body.check_in) or hotel_now()
    check_out = to_hotel_time(body.check_out)
    if check_out is not None and check_out <= check_in:
        raise ValidationFailedError("check_out must be after check_in")

    existing = await db.execute(select(Booking.id).where(Booking.booking_id == body.booking_id))
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("Booking code already exists")

    await ensure_room_available(db, room.id, check_in, check_out)

    booking = Booking(
        booking_id=body.booking_id,
        customer_id=customer.id,
        room_id=room.id,
        check_in=check_in,
        check_out=check_out,
        status=body.status,
        price=body.price if body.price is not None else room.price_per_night,
        advance_paid=body.advance_paid,
        people_count=body.people_count,
        add_ons=[line.model_dump(mode="json") for line in parse_add_ons(body.add_ons)],
        created_by_id=actor.user_id,
        created_by_name=await resolve_actor_name(db, actor),
        created_by_role=actor.role,
    )
    db.add(booking)
    room.status = _ROOM_STATUS_FOR_BOOKING[body.status]
    await db.flush()
    await db.refresh(booking)

    logger.info("Booking %s created for room %s by user %s", booking.booking_id, room.room_number, actor.user_id)
    return booking


async def update_booking_status(db: AsyncSession, booking_id: int, new_status: str) -> Booking:
    """Move an active booking between Confirmed and Checked-in.

    Raises:
        ValidationFailedError: ``new_status`` is Checked-out (use checkout instead).
        NotFoundError: the booking does not exist.
        ConflictError: the booking is already checked out.
    """
    if new_status == BookingStatus.CHECKED_OUT:
        raise ValidationFailedError("Use the checkout endpoint to check a booking out")

    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")

    result = await db.execute(
        update(Booking)
        .where(Booking.id == booking_id, Booking.status != BookingStatus.CHECKED_OUT)
        .values(status=new_status)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise ConflictError("Booking already checked out")

    await db.execute(
        update(Room)
        .where(Room.id == booking.room_id)
        .values(status=_ROOM_STATUS_FOR_BOOKING[new_status])
        .execution_options(synchronize_session=False)
    )
    await db.refresh(booking)
    return booking


async def delete_booking(db: AsyncSession, booking_id: int) -> None:
    """Delete an active booking and its unbilled kitchen orders.

    Checked-out bookings own a billing snapshot and cannot be deleted.
    """
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    if booking.status == BookingStatus.CHECKED_OUT:
        raise ConflictError("Checked-out bookings cannot be deleted")

    room_id = booking.room_id
    await db.execute(delete(KitchenOrder).where(KitchenOrder.booking_id == booking_id))
    await db.delete(booking)
    await db.flush()
    await sync_room_status(db, room_id)


async def sync_room_status(db: AsyncSession, room_id: int) -> None:
    """Recompute a room's status from the active bookings still holding it."""
    room = await db.get(Room, room_id)
    if room is None or room.status in (RoomStatus.MAINTENANCE, RoomStatus.CLEANING):
        return

    result = await db.execute(
        select(Booking.status).where(Booking.room_id == room_id, Booking.status.in_(BookingStatus.ACTIVE))
    )
    statuses = set(result.scalars().all())
    if BookingStatus.CHECKED_IN in statuses:
        room.status = RoomStatus.OCCUPIED
    elif BookingStatus.CONFIRMED in statuses:
        room.status = RoomStatus.BOOKED
    else:
        room.status = RoomStatus.AVAILABLE
    await db.flush()
