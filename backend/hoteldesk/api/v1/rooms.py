"""Rooms CRUD API router."""

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.api.deps import get_current_active_user, get_db
from hoteldesk.exceptions import ConflictError, NotFoundError
from hoteldesk.models.booking import Booking, BookingStatus
from hoteldesk.models.customer import Customer
from hoteldesk.models.room import Room
from hoteldesk.models.user import User
from hoteldesk.schemas.auth import MessageResponse
from hoteldesk.schemas.room import ActiveRoom, RoomCreate, RoomResponse, RoomUpdate, RoomWithOccupancy

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


async def _get_room(db: AsyncSession, room_id: int) -> Room:
    room = await db.get(Room, room_id)
    if room is None:
        raise NotFoundError("Room not found")
    return room


async def _ensure_room_number_free(db: AsyncSession, room_number: str, exclude_id: int | None = None) -> None:
    query = select(Room.id).where(Room.room_number == room_number)
    if exclude_id is not None:
        query = query.where(Room.id != exclude_id)
    if (await db.execute(query)).scalar_one_or_none() is not None:
        raise ConflictError("Room number already exists")


@router.get("", response_model=list[RoomWithOccupancy], summary="List rooms with current occupancy")
async def list_rooms(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[RoomWithOccupancy]:
    occupancy = (
        select(Booking.room_id, func.sum(Booking.people_count).label("current_occupancy"))
        .where(Booking.status.in_(BookingStatus.ACTIVE))
        .group_by(Booking.room_id)
        .subquery()
    )
    result = await db.execute(
        select(Room, func.coalesce(occupancy.c.current_occupancy, 0))
        .outerjoin(occupancy, occupancy.c.room_id == Room.id)
        .order_by(Room.room_number)
    )
    rooms = []
    for room, current_occupancy in result.all():
        item = RoomWithOccupancy.model_validate(room)
        item.current_occupancy = int(current_occupancy)
        rooms.append(item)
    return rooms


@router.get("/active", response_model=list[ActiveRoom], summary="Rooms held by active bookings")
async def list_active_rooms(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[dict]:
    result = await db.execute(
        select(
            Room.id.label("room_id"),
            Room.room_number,
            Room.capacity,
            Booking.id.label("booking_db_id"),
            Booking.booking_id.label("booking_code"),
            Booking.people_count,
            Booking.check_in,
            Customer.id.label("customer_id"),
            Customer.name.label("customer_name"),
        )
        .join(Room, Booking.room_id == Room.id)
        .join(Customer, Booking.customer_id == Customer.id)
        .where(Booking.status.in_(BookingStatus.ACTIVE))
        .order_by(Booking.id.desc())
    )
    return [dict(row) for row in result.mappings().all()]


@router.get("/{room_id}", response_model=RoomResponse, summary="Get a room")
async def get_room(
    room_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Room:
    return await _get_room(db, room_id)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED, summary="Create a room")
async def create_room(
    body: RoomCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Room:
    await _ensure_room_number_free(db, body.room_number)
    data = body.model_dump()
    data["amenities"] = data["amenities"] or {}
    data["add_ons"] = data["add_ons"] or {}
    room = Room(**data)
    db.add(room)
    await db.flush()
    await db.refresh(room)
    return room


@router.put("/{room_id}", response_model=RoomResponse, summary="Update a room")
async def update_room(
    room_id: int,
    body: RoomUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Room:
    """Partially update a room. Only explicitly provided fields are changed."""
    room = await _get_room(db, room_id)
    update_data = body.model_dump(exclude_unset=True)
    if "room_number" in update_data and update_data["room_number"] != room.room_number:
        await _ensure_room_number_free(db, update_data["room_number"], exclude_id=room_id)

    for field, value in update_data.items():
        setattr(room, field, value)

    await db.flush()
    await db.refresh(room)
    return room


@router.delete("/{room_id}", response_model=MessageResponse, summary="Delete a room")
async def delete_room(
    room_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> dict:
    """Delete a room that no booking references.

    Returns 409 while any booking (active or historical) points at it.
    """
    room = await _get_room(db, room_id)
    referenced = await db.execute(
        select(func.count()).select_from(Booking).where(Booking.room_id == room_id)
    )
    if referenced.scalar_one() > 0:
        raise ConflictError("Room is referenced by bookings and cannot be deleted")

    await db.delete(room)
    await db.flush()
    return {"message": "Room deleted"}
