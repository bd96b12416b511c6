"""Fold a booking's unsettled kitchen orders into per-item bill lines."""

from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.models.kitchen import KitchenOrder, KitchenOrderStatus, MenuItem
from hoteldesk.schemas.booking import KitchenLine


@dataclass
class KitchenConsumption:
    """Aggregated kitchen charges plus the ids of the orders they came from."""

    lines: list[KitchenLine] = field(default_factory=list)
    order_ids: list[int] = field(default_factory=list)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))


async def aggregate_kitchen_orders(db: AsyncSession, booking_id: int) -> KitchenConsumption:
    """Collect Pending/Served orders for ``booking_id``, grouped by menu item.

    Prices come from the menu item as it is now, not as it was when the
    order was placed. Read-only; the caller settles ``order_ids``.
    """
    result = await db.execute(
        select(
            KitchenOrder.id,
            KitchenOrder.item_id,
            KitchenOrder.quantity,
            MenuItem.name,
            MenuItem.price,
        )
        .join(MenuItem, KitchenOrder.item_id == MenuItem.id)
        .where(
            KitchenOrder.booking_id == booking_id,
            KitchenOrder.status.in_(KitchenOrderStatus.UNSETTLED),
        )
        .order_by(KitchenOrder.id)
    )

    consumption = KitchenConsumption()
    quantities: dict[int, int] = {}
    items: dict[int, tuple[str, Decimal]] = {}
    for order_id, item_id, quantity, item_name, item_price in result.all():
        consumption.order_ids.append(order_id)
        if item_id not in quantities:
            quantities[item_id] = 0
            items[item_id] = (item_name, Decimal(item_price or 0))
        quantities[item_id] += quantity or 0

    for item_id, quantity in quantities.items():
        item_name, item_price = items[item_id]
        consumption.lines.append(
            KitchenLine(
                item_id=item_id,
                item_name=item_name,
                item_price=item_price,
                quantity=quantity,
                line_total=item_price * quantity,
            )
        )
    return consumption
