"""Seed the database with a small hotel: an admin login, rooms, menu and GST settings.

Run from the backend directory:
    python -m scripts.seed_data
"""

import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select

import hoteldesk.models  # noqa: F401
from hoteldesk.auth.passwords import hash_password
from hoteldesk.config import settings
from hoteldesk.database import Base, create_engine_from_settings, create_session_factory
from hoteldesk.models.kitchen import Category, MenuItem
from hoteldesk.models.room import Room
from hoteldesk.models.settings import AddOn, GSTSetting
from hoteldesk.models.user import Role, User

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

ADMIN_USER = {
    "email": "admin@hotel.com",
    "password": "admin123",
    "name": "Hotel Admin",
}

ROOMS = [
    {"room_number": "101", "category": "Standard", "capacity": 2, "price_per_night": Decimal("1800.00")},
    {"room_number": "102", "category": "Standard", "capacity": 2, "price_per_night": Decimal("1800.00")},
    {"room_number": "103", "category": "Standard", "capacity": 3, "price_per_night": Decimal("2200.00")},
    {
        "room_number": "201",
        "category": "Deluxe",
        "capacity": 3,
        "price_per_night": Decimal("3200.00"),
        "amenities": {"ac": True, "balcony": True},
    },
    {
        "room_number": "202",
        "category": "Deluxe",
        "capacity": 3,
        "price_per_night": Decimal("3200.00"),
        "amenities": {"ac": True, "balcony": True},
    },
    {
        "room_number": "301",
        "category": "Suite",
        "capacity": 4,
        "price_per_night": Decimal("5500.00"),
        "amenities": {"ac": True, "bathtub": True, "living_room": True},
        "add_ons": {"Extra bed": 800},
    },
]

CATEGORIES = ["Beverages", "Breakfast", "Snacks", "Mains", "Desserts"]

MENU = [
    {"name": "Masala Tea", "category": "Beverages", "price": Decimal("40.00"), "stock": 200},
    {"name": "Filter Coffee", "category": "Beverages", "price": Decimal("60.00"), "stock": 200},
    {"name": "Fresh Lime Soda", "category": "Beverages", "price": Decimal("90.00"), "stock": 100},
    {"name": "Masala Dosa", "category": "Breakfast", "price": Decimal("120.00"), "stock": 50},
    {"name": "Poha", "category": "Breakfast", "price": Decimal("80.00"), "stock": 50},
    {"name": "Veg Sandwich", "category": "Snacks", "price": Decimal("110.00"), "stock": 40},
    {"name": "Paneer Butter Masala", "category": "Mains", "price": Decimal("280.00"), "stock": 30},
    {"name": "Veg Biryani", "category": "Mains", "price": Decimal("250.00"), "stock": 30},
    {"name": "Gulab Jamun", "category": "Desserts", "price": Decimal("90.00"), "stock": 60},
]

ADD_ONS = [
    {"name": "Breakfast buffet", "price": Decimal("350.00")},
    {"name": "Extra bed", "price": Decimal("800.00")},
    {"name": "Airport pickup", "price": Decimal("1200.00")},
    {"name": "Late checkout", "price": Decimal("500.00")},
]

GST_SETTINGS = [
    {"category": "room", "gst_rate": Decimal("12.00"), "is_enabled": True},
    {"category": "food", "gst_rate": Decimal("5.00"), "is_enabled": True},
    {"category": "add_ons", "gst_rate": Decimal("18.00"), "is_enabled": False},
]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Create the schema if needed and insert reference data.

    Idempotent: rows whose natural key (email, room number, name, category)
    already exists are left untouched.
    """
    engine = create_engine_from_settings(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        # ------------------------------------------------------------------
        # 1. Admin login
        # ------------------------------------------------------------------
        result = await session.execute(select(User).where(User.email == ADMIN_USER["email"]))
        if result.scalar_one_or_none() is None:
            session.add(
                User(
                    email=ADMIN_USER["email"],
                    hashed_password=hash_password(ADMIN_USER["password"]),
                    name=ADMIN_USER["name"],
                    role=Role.ADMIN,
                    is_active=True,
                )
            )
            print(f"✅ Created admin user: {ADMIN_USER['email']}")
        else:
            print(f"⚠️  Admin user '{ADMIN_USER['email']}' already exists, skipping")

        # ------------------------------------------------------------------
        # 2. Rooms
        # ------------------------------------------------------------------
        existing_rooms = set((await session.execute(select(Room.room_number))).scalars().all())
        new_rooms = [Room(**data) for data in ROOMS if data["room_number"] not in existing_rooms]
        session.add_all(new_rooms)
        for room in new_rooms:
            print(f"   🛏️  Room {room.room_number} — {room.category} (₹{room.price_per_night}/night)")

        # ------------------------------------------------------------------
        # 3. Menu
        # ------------------------------------------------------------------
        existing_categories = set((await session.execute(select(Category.name))).scalars().all())
        session.add_all(Category(name=name) for name in CATEGORIES if name not in existing_categories)

        existing_items = set((await session.execute(select(MenuItem.name))).scalars().all())
        new_items = [MenuItem(**data) for data in MENU if data["name"] not in existing_items]
        session.add_all(new_items)
        print(f"✅ Added {len(new_items)} menu items")

        # ------------------------------------------------------------------
        # 4. Add-ons and GST
        # ------------------------------------------------------------------
        existing_add_ons = set((await session.execute(select(AddOn.name))).scalars().all())
        session.add_all(AddOn(**data) for data in ADD_ONS if data["name"] not in existing_add_ons)

        existing_gst = set((await session.execute(select(GSTSetting.category))).scalars().all())
        session.add_all(GSTSetting(**data) for data in GST_SETTINGS if data["category"] not in existing_gst)

        await session.commit()

    await engine.dispose()

    print()
    print("=" * 60)
    print("📊 Seed Summary")
    print("=" * 60)
    print(f"   Admin:      {ADMIN_USER['email']} / {ADMIN_USER['password']}")
    print(f"   Rooms:      {len(new_rooms)} new")
    print(f"   Menu items: {len(new_items)} new")
    print("=" * 60)
    print("🎉 Done! You can now log in at /api/auth/login")


if __name__ == "__main__":
    asyncio.run(seed())
