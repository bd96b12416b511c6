"""Checkout orchestration — close a stay and write its bill in one transaction.

The service opens its own session so the whole checkout is a single unit of
work: booking status, room status, billing insert and kitchen settlement
either all commit or all roll back.

Concurrent checkouts of the same booking are serialized by a conditional
update (``... WHERE status != 'Checked-out'``). Only one transaction sees a
non-zero row count; the others roll back with ``ConflictError``.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from fastapi import Depends
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hoteldesk.database import get_session_factory
from hoteldesk.exceptions import ConflictError, HotelDeskError, NotFoundError, StoreError, ValidationFailedError
from hoteldesk.models.booking import Booking, BookingStatus
from hoteldesk.models.kitchen import KitchenOrder, KitchenOrderStatus
from hoteldesk.models.room import Room, RoomStatus
from hoteldesk.schemas.booking import ActorInfo, BillingSummary, CheckoutRequest
from hoteldesk.services.actor import Actor, resolve_actor_name
from hoteldesk.services.add_ons import add_ons_total, parse_add_ons
from hoteldesk.services.billing_writer import write_billing
from hoteldesk.services.kitchen_aggregator import aggregate_kitchen_orders
from hoteldesk.timeutils import hotel_now, to_hotel_time

logger = logging.getLogger(__name__)


def parse_total_override(value: Any) -> Decimal | None:
    """Return the client-supplied total as a Decimal, or None if absent or not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


class CheckoutService:
    """Drives a booking from active to Checked-out and produces its billing."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def checkout(
        self,
        booking_id: int,
        actor: Actor,
        overrides: CheckoutRequest | None = None,
    ) -> BillingSummary:
        """Check out ``booking_id`` and return the committed billing summary.

        Raises:
            NotFoundError: the booking does not exist.
            ValidationFailedError: the requested check-out is before check-in.
            ConflictError: the booking is already checked out, or a concurrent
                checkout won the race.
            StoreError: the database failed at any step.
        """
        overrides = overrides or CheckoutRequest()
        stage = "load booking"

        async with self._session_factory() as db:
            try:
                booking = await db.get(Booking, booking_id)
                if booking is None:
                    raise NotFoundError("Booking not found")
                if booking.status == BookingStatus.CHECKED_OUT:
                    raise ConflictError("Booking already checked out")

                requested_check_out = to_hotel_time(overrides.check_out)
                if requested_check_out is not None and requested_check_out < booking.check_in:
                    raise ValidationFailedError("check_out must not be before check_in")
                check_out = requested_check_out or booking.check_out or hotel_now()

                stage = "close booking"
                claimed = await db.execute(
                    update(Booking)
                    .where(Booking.id == booking.id, Booking.status != BookingStatus.CHECKED_OUT)
                    .values(status=BookingStatus.CHECKED_OUT, check_out=check_out)
                    .execution_options(synchronize_session=False)
                )
                if claimed.rowcount == 0:
                    raise ConflictError("Checkout conflict: booking status unchanged")

                stage = "release room"
                await db.execute(
                    update(Room)
                    .where(Room.id == booking.room_id)
                    .values(status=RoomStatus.AVAILABLE)
                    .execution_options(synchronize_session=False)
                )

                stage = "aggregate kitchen orders"
                consumption = await aggregate_kitchen_orders(db, booking.id)

                add_ons = parse_add_ons(overrides.add_ons)
                room_price = booking.price or Decimal("0")
                computed = room_price + consumption.subtotal + add_ons_total(add_ons)

                override = parse_total_override(overrides.total_amount)
                total = computed if override is None else override
                if override is not None and override != computed:
                    logger.warning(
                        "Booking %s: total overridden by user %s (%s): computed=%s charged=%s",
                        booking.id,
                        actor.user_id,
                        actor.role,
                        computed,
                        override,
                    )

                stage = "resolve actor"
                actor_name = await resolve_actor_name(db, actor)

                stage = "write billing"
                billing = await write_billing(
                    db,
                    booking=booking,
                    check_out=check_out,
                    room_price=room_price,
                    add_ons=add_ons,
                    kitchen_lines=consumption.lines,
                    computed_amount=computed,
                    total_amount=total,
                    total_overridden=override is not None,
                    actor=actor,
                    actor_name=actor_name,
                )

                if consumption.order_ids:
                    stage = "settle kitchen orders"
                    await db.execute(
                        update(KitchenOrder)
                        .where(
                            KitchenOrder.id.in_(consumption.order_ids),
                            KitchenOrder.status.in_(KitchenOrderStatus.UNSETTLED),
                        )
                        .values(status=KitchenOrderStatus.SETTLED)
                        .execution_options(synchronize_session=False)
                    )

                stage = "commit"
                await db.commit()
            except HotelDeskError:
                await self._rollback(db, booking_id)
                raise
            except SQLAlchemyError as exc:
                logger.exception("Checkout of booking %s failed at stage '%s'", booking_id, stage)
                await self._rollback(db, booking_id)
                raise StoreError("Checkout failed") from exc
            except Exception:
                logger.exception("Checkout of booking %s failed at stage '%s'", booking_id, stage)
                await self._rollback(db, booking_id)
                raise

        logger.info(
            "Booking %s checked out by %s (%s): billing=%s total=%s kitchen_orders=%d",
            booking.id,
            actor_name,
            actor.role,
            billing.id,
            total,
            len(consumption.order_ids),
        )
        advance_paid = booking.advance_paid or Decimal("0")
        return BillingSummary(
            billing_id=billing.id,
            booking_id=booking.booking_id,
            booking_db_id=booking.id,
            customer_id=booking.customer_id,
            room_id=booking.room_id,
            check_in=booking.check_in,
            check_out=check_out,
            room_price=room_price,
            add_ons=add_ons,
            kitchen_orders=consumption.lines,
            computed_amount=computed,
            total_amount=total,
            total_overridden=override is not None,
            advance_paid=advance_paid,
            balance=total - advance_paid,
            checked_out_by=ActorInfo(id=actor.user_id, name=actor_name, role=actor.role),
        )

    @staticmethod
    async def _rollback(db: AsyncSession, booking_id: int) -> None:
        try:
            await db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback after failed checkout of booking %s also failed", booking_id)


async def get_checkout_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> CheckoutService:
    return CheckoutService(session_factory)
