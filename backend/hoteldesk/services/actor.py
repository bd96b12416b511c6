"""The authenticated user on whose behalf a booking or checkout is performed."""

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.models.user import Role, Staff, User


@dataclass(frozen=True)
class Actor:
    user_id: int
    role: str
    staff_id: int | None = None

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(user_id=user.id, role=user.role, staff_id=user.staff_id)


async def resolve_actor_name(db: AsyncSession, actor: Actor) -> str:
    """Display name to stamp on audit fields.

    Staff are named from their staff record, admins from their user account.
    """
    if actor.role == Role.STAFF and actor.staff_id is not None:
        staff_name = (await db.execute(select(Staff.name).where(Staff.id == actor.staff_id))).scalar_one_or_none()
        if staff_name:
            return staff_name

    user_name = (await db.execute(select(User.name).where(User.id == actor.user_id))).scalar_one_or_none()
    return user_name or f"{actor.role} #{actor.user_id}"
