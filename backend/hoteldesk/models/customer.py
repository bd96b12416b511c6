"""Customer model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hoteldesk.database import Base, CreatedAtMixin, IntPrimaryKeyMixin


class Customer(IntPrimaryKeyMixin, CreatedAtMixin, Base):
    """A guest, with contact details and an optional ID document."""

    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    id_type: Mapped[str | None] = mapped_column(String(50))
    id_number: Mapped[str | None] = mapped_column(String(100))
    address: Mapped[str | None] = mapped_column(Text)
