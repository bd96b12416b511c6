"""Back-office reference tables: GST rates, add-on price list, expenses."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from hoteldesk.database import Base, CreatedAtMixin, IntPrimaryKeyMixin


class GSTSetting(IntPrimaryKeyMixin, Base):
    """GST rate applied to one charge category (room, food, ...)."""

    __tablename__ = "gst_settings"

    category: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    gst_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0"), nullable=False)
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(server_default=func.current_timestamp(), onupdate=func.current_timestamp())


class AddOn(IntPrimaryKeyMixin, Base):
    """An extra (breakfast, extra bed, ...) offered at booking or checkout."""

    __tablename__ = "add_ons"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)


class Expense(IntPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "expenses"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100))
    expense_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
