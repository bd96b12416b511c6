"""User and staff models — back-office accounts."""

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from hoteldesk.database import Base, CreatedAtMixin, IntPrimaryKeyMixin


class Role:
    ADMIN = "admin"
    STAFF = "staff"


class Staff(IntPrimaryKeyMixin, CreatedAtMixin, Base):
    """A staff member; each one gets a linked ``User`` login."""

    __tablename__ = "staff"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50))
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)  # active, inactive


class User(IntPrimaryKeyMixin, CreatedAtMixin, Base):
    """Login account for an admin or a staff member."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default=Role.ADMIN, nullable=False)
    staff_id: Mapped[int | None] = mapped_column(ForeignKey("staff.id", ondelete="SET NULL"), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role!r}>"
