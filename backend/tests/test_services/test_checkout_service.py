"""Tests for the checkout orchestrator.

Covers the billing arithmetic, exactly-once billing under concurrent
checkouts, kitchen settlement, and rollback when a step fails.
"""

import asyncio
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hoteldesk.exceptions import ConflictError, NotFoundError, StoreError, ValidationFailedError
from hoteldesk.models.billing import Billing
from hoteldesk.models.booking import Booking, BookingStatus
from hoteldesk.models.kitchen import KitchenOrder, KitchenOrderStatus, MenuItem
from hoteldesk.models.room import Room, RoomStatus
from hoteldesk.models.user import User
from hoteldesk.schemas.booking import CheckoutRequest
from hoteldesk.services.actor import Actor
from hoteldesk.services.checkout_service import CheckoutService, parse_total_override
from hoteldesk.services.kitchen_aggregator import aggregate_kitchen_orders

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

ADD_ONS = [{"description": "Breakfast", "amount": 200}, {"name": "Extra bed", "price": 150}]


async def _order_kitchen(db_session: AsyncSession, booking: Booking, menu_items: dict[str, MenuItem]) -> list[int]:
    """Two teas and two sandwiches (in separate orders): a 300 kitchen subtotal."""
    orders = [
        KitchenOrder(booking_id=booking.id, room_id=booking.room_id, item_id=menu_items["tea"].id, quantity=2),
        KitchenOrder(
            booking_id=booking.id,
            room_id=booking.room_id,
            item_id=menu_items["sandwich"].id,
            quantity=1,
            status=KitchenOrderStatus.SERVED,
        ),
        KitchenOrder(booking_id=booking.id, room_id=booking.room_id, item_id=menu_items["sandwich"].id, quantity=1),
    ]
    db_session.add_all(orders)
    await db_session.commit()
    return [order.id for order in orders]


async def _booking_status(session_factory: async_sessionmaker[AsyncSession], booking_id: int) -> str:
    async with session_factory() as session:
        return (await session.execute(select(Booking.status).where(Booking.id == booking_id))).scalar_one()


async def _order_statuses(session_factory: async_sessionmaker[AsyncSession], booking_id: int) -> list[str]:
    async with session_factory() as session:
        result = await session.execute(
            select(KitchenOrder.status).where(KitchenOrder.booking_id == booking_id).order_by(KitchenOrder.id)
        )
        return list(result.scalars().all())


async def _billing_count(session_factory: async_sessionmaker[AsyncSession], booking_id: int) -> int:
    async with session_factory() as session:
        result = await session.execute(
            select(func.count()).select_from(Billing).where(Billing.booking_id == booking_id)
        )
        return result.scalar_one()


@pytest.fixture
def admin_actor(admin_user: User) -> Actor:
    return Actor.from_user(admin_user)


# ---------------------------------------------------------------------------
# parse_total_override
# ---------------------------------------------------------------------------


class TestParseTotalOverride:
    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "NaN", "Infinity", True, [1800], {"total": 1}])
    def test_non_numeric_values_are_ignored(self, value):
        assert parse_total_override(value) is None

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1800, Decimal("1800")), ("1800.50", Decimal("1800.50")), (1799.5, Decimal("1799.5")), (0, Decimal("0"))],
    )
    def test_numeric_values_are_used(self, value, expected):
        assert parse_total_override(value) == expected


# ---------------------------------------------------------------------------
# Billing arithmetic
# ---------------------------------------------------------------------------


class TestCheckoutTotals:
    async def test_computed_total(
        self,
        db_session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        menu_items: dict[str, MenuItem],
        admin_actor: Actor,
    ):
        await _order_kitchen(db_session, checked_in_booking, menu_items)

        summary = await CheckoutService(session_factory).checkout(
            checked_in_booking.id, admin_actor, CheckoutRequest(add_ons=ADD_ONS)
        )

        assert summary.room_price == Decimal("1000.00")
        assert sum(line.line_total for line in summary.kitchen_orders) == Decimal("300.00")
        assert [line.amount for line in summary.add_ons] == [Decimal("200"), Decimal("150")]
        assert summary.computed_amount == Decimal("1650")
        assert summary.total_amount == Decimal("1650")
        assert summary.total_overridden is False
        assert summary.advance_paid == Decimal("200.00")
        assert summary.balance == Decimal("1450")

    async def test_total_override_wins(
        self,
        db_session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        menu_items: dict[str, MenuItem],
        admin_actor: Actor,
    ):
        await _order_kitchen(db_session, checked_in_booking, menu_items)

        summary = await CheckoutService(session_factory).checkout(
            checked_in_booking.id, admin_actor, CheckoutRequest(add_ons=ADD_ONS, total_amount=1800)
        )

        assert summary.computed_amount == Decimal("1650")
        assert summary.total_amount == Decimal("1800")
        assert summary.total_overridden is True
        assert summary.balance == Decimal("1600")

        async with session_factory() as session:
            billing = (await session.execute(select(Billing))).scalar_one()
        assert billing.total_amount == Decimal("1800")
        assert billing.computed_amount == Decimal("1650")
        assert billing.total_overridden is True

    async def test_non_numeric_override_falls_back_to_computed(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        admin_actor: Actor,
    ):
        summary = await CheckoutService(session_factory).checkout(
            checked_in_booking.id, admin_actor, CheckoutRequest(total_amount="call me")
        )

        assert summary.total_amount == Decimal("1000")
        assert summary.total_overridden is False

    async def test_booking_add_ons_are_not_billed_unless_resupplied(
        self,
        db_session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        admin_actor: Actor,
    ):
        checked_in_booking.add_ons = [{"description": "Breakfast", "amount": "200"}]
        await db_session.commit()

        summary = await CheckoutService(session_factory).checkout(checked_in_booking.id, admin_actor)

        assert summary.add_ons == []
        assert summary.total_amount == Decimal("1000")


# ---------------------------------------------------------------------------
# State transitions
# ---------------------------------------------------------------------------


class TestCheckoutState:
    async def test_checkout_closes_booking_frees_room_and_settles_orders(
        self,
        db_session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        test_room: Room,
        menu_items: dict[str, MenuItem],
        admin_actor: Actor,
    ):
        await _order_kitchen(db_session, checked_in_booking, menu_items)

        summary = await CheckoutService(session_factory).checkout(checked_in_booking.id, admin_actor)

        async with session_factory() as session:
            booking = await session.get(Booking, checked_in_booking.id)
            room = await session.get(Room, test_room.id)
        assert booking.status == BookingStatus.CHECKED_OUT
        assert booking.check_out == summary.check_out
        assert room.status == RoomStatus.AVAILABLE
        assert await _order_statuses(session_factory, checked_in_booking.id) == [KitchenOrderStatus.SETTLED] * 3
        assert await _billing_count(session_factory, checked_in_booking.id) == 1

    async def test_cancelled_orders_are_left_alone(
        self,
        db_session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        menu_items: dict[str, MenuItem],
        admin_actor: Actor,
    ):
        db_session.add(
            KitchenOrder(
                booking_id=checked_in_booking.id,
                room_id=checked_in_booking.room_id,
                item_id=menu_items["tea"].id,
                quantity=4,
                status=KitchenOrderStatus.CANCELLED,
            )
        )
        await db_session.commit()

        summary = await CheckoutService(session_factory).checkout(checked_in_booking.id, admin_actor)

        assert summary.kitchen_orders == []
        assert await _order_statuses(session_factory, checked_in_booking.id) == [KitchenOrderStatus.CANCELLED]

    async def test_explicit_check_out_time_is_used(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        admin_actor: Actor,
    ):
        check_out = datetime(2026, 3, 4, 10, 30)

        summary = await CheckoutService(session_factory).checkout(
            checked_in_booking.id, admin_actor, CheckoutRequest(check_out=check_out)
        )

        assert summary.check_out == check_out

    async def test_open_ended_booking_gets_current_time(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        admin_actor: Actor,
    ):
        summary = await CheckoutService(session_factory).checkout(checked_in_booking.id, admin_actor)

        assert summary.check_out is not None
        assert summary.check_out > checked_in_booking.check_in

    async def test_staff_checkout_is_stamped_with_staff_name(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        staff_user: User,
    ):
        summary = await CheckoutService(session_factory).checkout(checked_in_booking.id, Actor.from_user(staff_user))

        assert summary.checked_out_by.name == "Ravi Kumar"
        assert summary.checked_out_by.role == "staff"

        async with session_factory() as session:
            billing = (await session.execute(select(Billing))).scalar_one()
        assert billing.created_by_name == "Ravi Kumar"
        assert billing.created_by_id == staff_user.id


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestCheckoutFailures:
    async def test_unknown_booking(self, session_factory: async_sessionmaker[AsyncSession], admin_actor: Actor):
        with pytest.raises(NotFoundError):
            await CheckoutService(session_factory).checkout(9999, admin_actor)

    async def test_second_checkout_conflicts_and_bills_once(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        admin_actor: Actor,
    ):
        service = CheckoutService(session_factory)
        await service.checkout(checked_in_booking.id, admin_actor)

        with pytest.raises(ConflictError, match="already checked out"):
            await service.checkout(checked_in_booking.id, admin_actor)

        assert await _billing_count(session_factory, checked_in_booking.id) == 1

    async def test_check_out_before_check_in_is_rejected(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        admin_actor: Actor,
    ):
        request = CheckoutRequest(check_out=datetime(2026, 2, 27, 9, 0))

        with pytest.raises(ValidationFailedError):
            await CheckoutService(session_factory).checkout(checked_in_booking.id, admin_actor, request)

        assert await _billing_count(session_factory, checked_in_booking.id) == 0
        assert await _booking_status(session_factory, checked_in_booking.id) == BookingStatus.CHECKED_IN

    async def test_concurrent_checkouts_produce_exactly_one_billing(
        self,
        db_session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        menu_items: dict[str, MenuItem],
        admin_actor: Actor,
    ):
        await _order_kitchen(db_session, checked_in_booking, menu_items)
        service = CheckoutService(session_factory)

        results = await asyncio.gather(
            service.checkout(checked_in_booking.id, admin_actor, CheckoutRequest(add_ons=ADD_ONS)),
            service.checkout(checked_in_booking.id, admin_actor, CheckoutRequest(add_ons=ADD_ONS)),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, BaseException)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(successes) == 1
        assert len(conflicts) == 1
        assert successes[0].total_amount == Decimal("1650")
        assert await _billing_count(session_factory, checked_in_booking.id) == 1
        assert await _order_statuses(session_factory, checked_in_booking.id) == [KitchenOrderStatus.SETTLED] * 3

    async def test_settled_orders_are_never_billed_again(
        self,
        db_session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        menu_items: dict[str, MenuItem],
        admin_actor: Actor,
    ):
        await _order_kitchen(db_session, checked_in_booking, menu_items)
        await CheckoutService(session_factory).checkout(checked_in_booking.id, admin_actor)

        async with session_factory() as session:
            consumption = await aggregate_kitchen_orders(session, checked_in_booking.id)
        assert consumption.order_ids == []
        assert consumption.subtotal == Decimal("0")

    async def test_billing_insert_failure_rolls_everything_back(
        self,
        db_session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        test_room: Room,
        menu_items: dict[str, MenuItem],
        admin_actor: Actor,
    ):
        await _order_kitchen(db_session, checked_in_booking, menu_items)
        failing_write = AsyncMock(side_effect=OperationalError("INSERT INTO billings", {}, Exception("disk I/O error")))

        with patch("hoteldesk.services.checkout_service.write_billing", failing_write):
            with pytest.raises(StoreError):
                await CheckoutService(session_factory).checkout(
                    checked_in_booking.id, admin_actor, CheckoutRequest(add_ons=ADD_ONS)
                )

        failing_write.assert_awaited_once()
        assert await _booking_status(session_factory, checked_in_booking.id) == BookingStatus.CHECKED_IN
        assert await _order_statuses(session_factory, checked_in_booking.id) == [
            KitchenOrderStatus.PENDING,
            KitchenOrderStatus.SERVED,
            KitchenOrderStatus.PENDING,
        ]
        assert await _billing_count(session_factory, checked_in_booking.id) == 0
        async with session_factory() as session:
            room = await session.get(Room, test_room.id)
        assert room.status == RoomStatus.OCCUPIED

    async def test_checkout_can_be_retried_after_a_failure(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        admin_actor: Actor,
    ):
        service = CheckoutService(session_factory)
        failing_write = AsyncMock(side_effect=OperationalError("INSERT INTO billings", {}, Exception("locked")))
        with patch("hoteldesk.services.checkout_service.write_billing", failing_write):
            with pytest.raises(StoreError):
                await service.checkout(checked_in_booking.id, admin_actor)

        summary = await service.checkout(checked_in_booking.id, admin_actor)

        assert summary.total_amount == Decimal("1000")
        assert await _billing_count(session_factory, checked_in_booking.id) == 1

    async def test_rollback_failure_does_not_mask_original_error(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        checked_in_booking: Booking,
        admin_actor: Actor,
    ):
        failing_write = AsyncMock(side_effect=OperationalError("INSERT INTO billings", {}, Exception("boom")))
        failing_rollback = AsyncMock(side_effect=OperationalError("ROLLBACK", {}, Exception("gone")))

        with (
            patch("hoteldesk.services.checkout_service.write_billing", failing_write),
            patch.object(AsyncSession, "rollback", failing_rollback),
        ):
            with pytest.raises(StoreError, match="Checkout failed"):
                await CheckoutService(session_factory).checkout(checked_in_booking.id, admin_actor)

        failing_rollback.assert_awaited()
