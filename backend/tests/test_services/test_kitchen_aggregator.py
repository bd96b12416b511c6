"""Tests for folding kitchen orders into per-item bill lines."""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.models.booking import Booking
from hoteldesk.models.kitchen import KitchenOrder, KitchenOrderStatus, MenuItem
from hoteldesk.services.kitchen_aggregator import aggregate_kitchen_orders


async def _order(
    db_session: AsyncSession,
    booking: Booking,
    item: MenuItem,
    quantity: int,
    status: str = KitchenOrderStatus.PENDING,
) -> KitchenOrder:
    order = KitchenOrder(
        booking_id=booking.id,
        room_id=booking.room_id,
        item_id=item.id,
        quantity=quantity,
        status=status,
    )
    db_session.add(order)
    await db_session.commit()
    return order


class TestAggregateKitchenOrders:
    async def test_no_orders_gives_empty_consumption(self, db_session: AsyncSession, checked_in_booking: Booking):
        consumption = await aggregate_kitchen_orders(db_session, checked_in_booking.id)
        assert consumption.lines == []
        assert consumption.order_ids == []
        assert consumption.subtotal == Decimal("0")

    async def test_groups_quantities_by_item(
        self, db_session: AsyncSession, checked_in_booking: Booking, menu_items: dict[str, MenuItem]
    ):
        first = await _order(db_session, checked_in_booking, menu_items["sandwich"], 1)
        tea = await _order(db_session, checked_in_booking, menu_items["tea"], 2, KitchenOrderStatus.SERVED)
        second = await _order(db_session, checked_in_booking, menu_items["sandwich"], 1, KitchenOrderStatus.SERVED)

        consumption = await aggregate_kitchen_orders(db_session, checked_in_booking.id)

        assert [(line.item_name, line.quantity, line.line_total) for line in consumption.lines] == [
            ("Paneer Sandwich", 2, Decimal("200.00")),
            ("Masala Tea", 2, Decimal("100.00")),
        ]
        assert consumption.order_ids == [first.id, tea.id, second.id]
        assert consumption.subtotal == Decimal("300.00")

    async def test_settled_and_cancelled_orders_are_excluded(
        self, db_session: AsyncSession, checked_in_booking: Booking, menu_items: dict[str, MenuItem]
    ):
        await _order(db_session, checked_in_booking, menu_items["tea"], 3, KitchenOrderStatus.SETTLED)
        await _order(db_session, checked_in_booking, menu_items["tea"], 5, KitchenOrderStatus.CANCELLED)
        pending = await _order(db_session, checked_in_booking, menu_items["tea"], 1)

        consumption = await aggregate_kitchen_orders(db_session, checked_in_booking.id)

        assert consumption.order_ids == [pending.id]
        assert consumption.subtotal == Decimal("50.00")

    async def test_uses_current_menu_price(
        self, db_session: AsyncSession, checked_in_booking: Booking, menu_items: dict[str, MenuItem]
    ):
        await _order(db_session, checked_in_booking, menu_items["tea"], 2)
        menu_items["tea"].price = Decimal("60.00")
        await db_session.commit()

        consumption = await aggregate_kitchen_orders(db_session, checked_in_booking.id)

        assert consumption.lines[0].item_price == Decimal("60.00")
        assert consumption.subtotal == Decimal("120.00")
