"""SQLAlchemy models for HotelDesk.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from hoteldesk.models.billing import Billing
from hoteldesk.models.booking import Booking, BookingStatus
from hoteldesk.models.customer import Customer
from hoteldesk.models.kitchen import Category, KitchenOrder, KitchenOrderStatus, MenuItem
from hoteldesk.models.room import Room, RoomStatus
from hoteldesk.models.settings import AddOn, Expense, GSTSetting
from hoteldesk.models.user import Role, Staff, User

__all__ = [
    "AddOn",
    "Billing",
    "Booking",
    "BookingStatus",
    "Category",
    "Customer",
    "Expense",
    "GSTSetting",
    "KitchenOrder",
    "KitchenOrderStatus",
    "MenuItem",
    "Role",
    "Room",
    "RoomStatus",
    "Staff",
    "User",
]
