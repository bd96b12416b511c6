"""Kitchen API router — menu items, categories and room-service orders.

Orders are charged to a booking. Their status can be moved between
Pending, Served and Cancelled by hand; Settled is set only by checkout.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.api.deps import get_current_active_user, get_db
from hoteldesk.exceptions import ConflictError, NotFoundError, ValidationFailedError
from hoteldesk.models.booking import Booking, BookingStatus
from hoteldesk.models.customer import Customer
from hoteldesk.models.kitchen import Category, KitchenOrder, KitchenOrderStatus, MenuItem
from hoteldesk.models.room import Room
from hoteldesk.models.user import User
from hoteldesk.schemas.auth import MessageResponse
from hoteldesk.schemas.kitchen import (
    CategoryCreate,
    CategoryResponse,
    KitchenOrderCreate,
    KitchenOrderListItem,
    KitchenOrderResponse,
    KitchenOrderStatusUpdate,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/kitchen", tags=["kitchen"])


# ---------------------------------------------------------------------------
# Menu items
# ---------------------------------------------------------------------------


async def _get_menu_item(db: AsyncSession, item_id: int) -> MenuItem:
    item = await db.get(MenuItem, item_id)
    if item is None:
        raise NotFoundError("Menu item not found")
    return item


@router.get("/items", response_model=list[MenuItemResponse], summary="List menu items")
async def list_menu_items(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[MenuItem]:
    result = await db.execute(select(MenuItem).order_by(MenuItem.category, MenuItem.name))
    return list(result.scalars().all())


@router.get("/items/{item_id}", response_model=MenuItemResponse, summary="Get a menu item")
async def get_menu_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> MenuItem:
    return await _get_menu_item(db, item_id)


@router.post("/items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED, summary="Create a menu item")
async def create_menu_item(
    body: MenuItemCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> MenuItem:
    item = MenuItem(**body.model_dump())
    db.add(item)
    await db.flush()
    await db.refresh(item)
    return item


@router.put("/items/{item_id}", response_model=MenuItemResponse, summary="Update a menu item")
async def update_menu_item(
    item_id: int,
    body: MenuItemUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> MenuItem:
    """Partial update. A price change applies to every order not yet settled."""
    item = await _get_menu_item(db, item_id)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(item, field, value)
    await db.flush()
    await db.refresh(item)
    return item


@router.delete("/items/{item_id}", response_model=MessageResponse, summary="Delete a menu item")
async def delete_menu_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> dict:
    item = await _get_menu_item(db, item_id)
    ordered = await db.execute(select(KitchenOrder.id).where(KitchenOrder.item_id == item_id).limit(1))
    if ordered.scalar_one_or_none() is not None:
        raise ConflictError("Menu item has orders and cannot be deleted")
    await db.delete(item)
    await db.flush()
    return {"message": "Menu item deleted"}


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@router.get("/categories", response_model=list[CategoryResponse], summary="List menu categories")
async def list_categories(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[Category]:
    result = await db.execute(select(Category).order_by(Category.name))
    return list(result.scalars().all())


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a menu category",
)
async def create_category(
    body: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Category:
    existing = await db.execute(select(Category.id).where(Category.name == body.name))
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("Category already exists")
    category = Category(name=body.name)
    db.add(category)
    await db.flush()
    return category


@router.delete("/categories/{category_id}", response_model=MessageResponse, summary="Delete a menu category")
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> dict:
    category = await db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    await db.delete(category)
    await db.flush()
    return {"message": "Category deleted"}


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


@router.get("/orders", response_model=list[KitchenOrderListItem], summary="List kitchen orders")
async def list_kitchen_orders(
    status_filter: str | None = Query(None, alias="status", description="Filter by order status"),
    booking_id: int | None = Query(None, description="Filter by booking"),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[dict]:
    query = (
        select(
            KitchenOrder.id,
            KitchenOrder.booking_id,
            KitchenOrder.quantity,
            KitchenOrder.status,
            KitchenOrder.created_at,
            Room.room_number,
            Customer.name.label("customer_name"),
            MenuItem.name.label("item_name"),
            MenuItem.price,
        )
        .join(Booking, KitchenOrder.booking_id == Booking.id)
        .join(Customer, Booking.customer_id == Customer.id)
        .join(MenuItem, KitchenOrder.item_id == MenuItem.id)
        .outerjoin(Room, KitchenOrder.room_id == Room.id)
    )
    if status_filter is not None:
        query = query.where(KitchenOrder.status == status_filter)
    if booking_id is not None:
        query = query.where(KitchenOrder.booking_id == booking_id)

    result = await db.execute(query.order_by(KitchenOrder.created_at.desc(), KitchenOrder.id.desc()))
    return [dict(row) for row in result.mappings().all()]


@router.post(
    "/orders",
    response_model=KitchenOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place a kitchen order for a booking",
)
async def create_kitchen_order(
    body: KitchenOrderCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> KitchenOrder:
    """Orders can only be placed against an active (not checked-out) booking."""
    booking = await db.get(Booking, body.booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    if booking.status not in BookingStatus.ACTIVE:
        raise ValidationFailedError("Orders can only be placed for active bookings")
    await _get_menu_item(db, body.item_id)

    order = KitchenOrder(
        booking_id=booking.id,
        room_id=booking.room_id,
        item_id=body.item_id,
        quantity=body.quantity,
        status=KitchenOrderStatus.PENDING,
    )
    db.add(order)
    await db.flush()
    await db.refresh(order)
    logger.info("Kitchen order %s placed for booking %s", order.id, booking.booking_id)
    return order


@router.put("/orders/{order_id}", response_model=KitchenOrderResponse, summary="Update a kitchen order's status")
async def update_kitchen_order_status(
    order_id: int,
    body: KitchenOrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> KitchenOrder:
    """Returns 409 if the order was already settled by a checkout."""
    order = await db.get(KitchenOrder, order_id)
    if order is None:
        raise NotFoundError("Kitchen order not found")

    result = await db.execute(
        update(KitchenOrder)
        .where(KitchenOrder.id == order_id, KitchenOrder.status != KitchenOrderStatus.SETTLED)
        .values(status=body.status)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise ConflictError("Kitchen order is already settled")

    await db.refresh(order)
    return order
