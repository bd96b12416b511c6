"""Shared test configuration and fixtures.

Every test gets its own SQLite database file under ``tmp_path``:
- The schema is created with ``Base.metadata.create_all``.
- The app's ``session_factory`` is pointed at that database, so API calls and
  direct service calls see the same data.
"""

from collections.abc import AsyncGenerator
from datetime import datetime
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import hoteldesk.models  # noqa: F401
from hoteldesk.auth.jwt import create_user_token
from hoteldesk.auth.passwords import hash_password
from hoteldesk.config import Settings
from hoteldesk.database import Base, create_engine_from_settings, create_session_factory
from hoteldesk.main import app
from hoteldesk.models.booking import Booking, BookingStatus
from hoteldesk.models.customer import Customer
from hoteldesk.models.kitchen import MenuItem
from hoteldesk.models.room import Room, RoomStatus
from hoteldesk.models.user import Role, Staff, User

# ---------------------------------------------------------------------------
# Per-test database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Engine on a fresh WAL-mode SQLite file, with all tables created."""
    test_settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'hotel_test.db'}",
        db_busy_timeout_seconds=5.0,
    )
    engine = create_engine_from_settings(test_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(test_engine)


@pytest_asyncio.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """A session for arranging data; fixtures commit what they add."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the per-test database."""
    app.state.session_factory = session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Convenience fixtures: users
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Create and return an admin login."""
    user = User(
        name="Front Desk Admin",
        email="admin@hotel.com",
        hashed_password=hash_password("admin123"),
        role=Role.ADMIN,
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def auth_headers(admin_user: User) -> dict[str, str]:
    """Return Authorization headers for the admin user."""
    return {"Authorization": f"Bearer {create_user_token(admin_user)}"}


@pytest_asyncio.fixture
async def staff_user(db_session: AsyncSession) -> User:
    """Create a staff member together with their login."""
    staff = Staff(name="Ravi Kumar", phone="9000000001", status="active")
    db_session.add(staff)
    await db_session.flush()

    user = User(
        name="staff login",
        email=f"staff{staff.id}@hotel.com",
        hashed_password=hash_password("staff123"),
        role=Role.STAFF,
        staff_id=staff.id,
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def staff_headers(staff_user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(staff_user)}"}


# ---------------------------------------------------------------------------
# Convenience fixtures: room, customer, menu, booking
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_room(db_session: AsyncSession) -> Room:
    room = Room(
        room_number="101",
        category="Deluxe",
        capacity=2,
        price_per_night=Decimal("1000.00"),
        status=RoomStatus.AVAILABLE,
        amenities={"ac": True, "wifi": True},
        add_ons={},
    )
    db_session.add(room)
    await db_session.commit()
    return room


@pytest_asyncio.fixture
async def test_customer(db_session: AsyncSession) -> Customer:
    customer = Customer(name="Asha Rao", contact="9876543210", email="asha@example.com")
    db_session.add(customer)
    await db_session.commit()
    return customer


@pytest_asyncio.fixture
async def menu_items(db_session: AsyncSession) -> dict[str, MenuItem]:
    """Masala Tea at 50 and Paneer Sandwich at 100."""
    items = {
        "tea": MenuItem(name="Masala Tea", category="Beverages", price=Decimal("50.00"), stock=100),
        "sandwich": MenuItem(name="Paneer Sandwich", category="Snacks", price=Decimal("100.00"), stock=40),
    }
    db_session.add_all(items.values())
    await db_session.commit()
    return items


@pytest_asyncio.fixture
async def checked_in_booking(
    db_session: AsyncSession,
    test_room: Room,
    test_customer: Customer,
    admin_user: User,
) -> Booking:
    """An open-ended Checked-in stay in room 101 at 1000, with 200 paid in advance."""
    booking = Booking(
        booking_id="BK-1001",
        customer_id=test_customer.id,
        room_id=test_room.id,
        check_in=datetime(2026, 3, 1, 12, 0),
        check_out=None,
        status=BookingStatus.CHECKED_IN,
        price=Decimal("1000.00"),
        advance_paid=Decimal("200.00"),
        people_count=2,
        add_ons=[],
        created_by_id=admin_user.id,
        created_by_name=admin_user.name,
        created_by_role=admin_user.role,
    )
    db_session.add(booking)
    test_room.status = RoomStatus.OCCUPIED
    await db_session.commit()
    return booking
