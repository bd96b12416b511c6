"""Booking model — a customer's stay in a room."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from hoteldesk.database import Base, CreatedAtMixin, IntPrimaryKeyMixin


class BookingStatus:
    CONFIRMED = "Confirmed"
    CHECKED_IN = "Checked-in"
    CHECKED_OUT = "Checked-out"

    # Statuses that hold the room
    ACTIVE = (CONFIRMED, CHECKED_IN)
    ALL = (CONFIRMED, CHECKED_IN, CHECKED_OUT)


class Booking(IntPrimaryKeyMixin, CreatedAtMixin, Base):
    """A reservation linking a customer to a room.

    ``check_out`` stays null (open-ended) until it is scheduled at creation or
    stamped by checkout. Once ``status`` is Checked-out the row never changes
    again.
    """

    __tablename__ = "bookings"

    booking_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False, index=True)
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id"), nullable=False)
    check_in: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    check_out: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=BookingStatus.CONFIRMED, nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    advance_paid: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    people_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    add_ons: Mapped[list | None] = mapped_column(JSON, default=list)

    # Who created the booking; written once
    created_by_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_by_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_by_role: Mapped[str | None] = mapped_column(String(20), nullable=True)

    __table_args__ = (Index("ix_bookings_room_status", "room_id", "status"),)

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, code={self.booking_id!r}, room_id={self.room_id}, status={self.status!r})>"
