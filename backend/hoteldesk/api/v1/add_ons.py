"""Add-on price list CRUD API router."""

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.api.deps import get_current_active_user, get_db
from hoteldesk.exceptions import NotFoundError
from hoteldesk.models.settings import AddOn
from hoteldesk.models.user import User
from hoteldesk.schemas.auth import MessageResponse
from hoteldesk.schemas.back_office import AddOnCreate, AddOnResponse, AddOnUpdate

router = APIRouter(prefix="/api/addons", tags=["add-ons"])


async def _get_add_on(db: AsyncSession, add_on_id: int) -> AddOn:
    add_on = await db.get(AddOn, add_on_id)
    if add_on is None:
        raise NotFoundError("Add-on not found")
    return add_on


@router.get("", response_model=list[AddOnResponse], summary="List add-ons")
async def list_add_ons(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[AddOn]:
    result = await db.execute(select(AddOn).order_by(AddOn.name))
    return list(result.scalars().all())


@router.post("", response_model=AddOnResponse, status_code=status.HTTP_201_CREATED, summary="Create an add-on")
async def create_add_on(
    body: AddOnCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> AddOn:
    add_on = AddOn(**body.model_dump())
    db.add(add_on)
    await db.flush()
    return add_on


@router.put("/{add_on_id}", response_model=AddOnResponse, summary="Update an add-on")
async def update_add_on(
    add_on_id: int,
    body: AddOnUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> AddOn:
    add_on = await _get_add_on(db, add_on_id)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(add_on, field, value)
    await db.flush()
    return add_on


@router.delete("/{add_on_id}", response_model=MessageResponse, summary="Delete an add-on")
async def delete_add_on(
    add_on_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> dict:
    add_on = await _get_add_on(db, add_on_id)
    await db.delete(add_on)
    await db.flush()
    return {"message": "Add-on deleted"}
