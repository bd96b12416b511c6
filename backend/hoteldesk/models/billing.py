"""Billing model — the immutable invoice snapshot written at checkout."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from hoteldesk.database import Base, CreatedAtMixin, IntPrimaryKeyMixin


class Billing(IntPrimaryKeyMixin, CreatedAtMixin, Base):
    """One row per checked-out booking; never updated or deleted.

    ``computed_amount`` is what the server charged; ``total_amount`` differs
    from it only when ``total_overridden`` is set.
    """

    __tablename__ = "billings"

    booking_id: Mapped[int] = mapped_column(ForeignKey("bookings.id"), unique=True, nullable=False)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False)
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id"), nullable=False)
    check_in: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    check_out: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    room_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    advance_paid: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    add_ons: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    kitchen_orders: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    computed_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_overridden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    balance: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    created_by_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_by_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_by_role: Mapped[str | None] = mapped_column(String(20), nullable=True)

    def __repr__(self) -> str:
        return f"<Billing(id={self.id}, booking_id={self.booking_id}, total={self.total_amount})>"
