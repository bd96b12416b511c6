"""Room availability checks.

Intervals are half-open ``[check_in, check_out)``; a null ``check_out`` on
either side means the stay is open-ended.
"""

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.exceptions import ConflictError
from hoteldesk.models.booking import Booking, BookingStatus


async def find_overlapping_booking(
    db: AsyncSession,
    room_id: int,
    check_in: datetime,
    check_out: datetime | None,
    exclude_booking_id: int | None = None,
) -> Booking | None:
    """Return an active booking on ``room_id`` that overlaps the proposed stay, if any."""
    query = select(Booking).where(
        Booking.room_id == room_id,
        Booking.status.in_(BookingStatus.ACTIVE),
        or_(Booking.check_out.is_(None), Booking.check_out > check_in),
    )
    if check_out is not None:
        query = query.where(Booking.check_in < check_out)
    if exclude_booking_id is not None:
        query = query.where(Booking.id != exclude_booking_id)

    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none()


async def is_room_available(
    db: AsyncSession,
    room_id: int,
    check_in: datetime,
    check_out: datetime | None,
    exclude_booking_id: int | None = None,
) -> bool:
    overlapping = await find_overlapping_booking(db, room_id, check_in, check_out, exclude_booking_id)
    return overlapping is None


async def ensure_room_available(
    db: AsyncSession,
    room_id: int,
    check_in: datetime,
    check_out: datetime | None,
    exclude_booking_id: int | None = None,
) -> None:
    """Raise ``ConflictError`` if the room is already held for any part of the stay."""
    overlapping = await find_overlapping_booking(db, room_id, check_in, check_out, exclude_booking_id)
    if overlapping is not None:
        raise ConflictError(
            f"Room is already booked for these dates (booking {overlapping.booking_id})",
        )
