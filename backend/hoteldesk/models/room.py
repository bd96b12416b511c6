"""Room model — bookable hotel rooms."""

from decimal import Decimal

from sqlalchemy import JSON, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from hoteldesk.database import Base, IntPrimaryKeyMixin


class RoomStatus:
    AVAILABLE = "Available"
    BOOKED = "Booked"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"
    CLEANING = "Cleaning"

    ALL = (AVAILABLE, BOOKED, OCCUPIED, MAINTENANCE, CLEANING)


class Room(IntPrimaryKeyMixin, Base):
    """A room whose status follows the bookings that currently hold it."""

    __tablename__ = "rooms"

    room_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), default=None)
    capacity: Mapped[int] = mapped_column(Integer, default=2, nullable=False)
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(30), default=RoomStatus.AVAILABLE, nullable=False)
    amenities: Mapped[dict | None] = mapped_column(JSON, default=dict)
    add_ons: Mapped[dict | None] = mapped_column(JSON, default=dict)  # {"Extra bed": 500, ...}

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.room_number!r}, status={self.status!r})>"
