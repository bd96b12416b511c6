"""Kitchen models — menu, categories, and room-service orders."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from hoteldesk.database import Base, IntPrimaryKeyMixin


class KitchenOrderStatus:
    PENDING = "Pending"
    SERVED = "Served"
    CANCELLED = "Cancelled"
    SETTLED = "Settled"

    # Orders still owed by the guest
    UNSETTLED = (PENDING, SERVED)
    # Statuses a user may set by hand; Settled is reserved for checkout
    MANUAL = (PENDING, SERVED, CANCELLED)


class Category(IntPrimaryKeyMixin, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


class MenuItem(IntPrimaryKeyMixin, Base):
    """A dish or drink; ``price`` is always the current price."""

    __tablename__ = "menu_items"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100))
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[str | None] = mapped_column(String(30), default="Available")


class KitchenOrder(IntPrimaryKeyMixin, Base):
    """A room-service order charged to a booking at checkout."""

    __tablename__ = "kitchen_orders"

    booking_id: Mapped[int] = mapped_column(ForeignKey("bookings.id"), nullable=False, index=True)
    room_id: Mapped[int | None] = mapped_column(ForeignKey("rooms.id"), nullable=True)
    item_id: Mapped[int] = mapped_column(ForeignKey("menu_items.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[str] = mapped_column(String(20), default=KitchenOrderStatus.PENDING, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.current_timestamp())

    def __repr__(self) -> str:
        return f"<KitchenOrder(id={self.id}, booking_id={self.booking_id}, item_id={self.item_id}, status={self.status!r})>"
