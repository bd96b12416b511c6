"""Expenses API router."""

from datetime import timedelta

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.api.deps import get_current_active_user, get_db
from hoteldesk.exceptions import NotFoundError
from hoteldesk.models.settings import Expense
from hoteldesk.models.user import User
from hoteldesk.schemas.auth import MessageResponse
from hoteldesk.schemas.back_office import ExpenseCreate, ExpenseResponse
from hoteldesk.timeutils import hotel_now

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED, summary="Record an expense")
async def create_expense(
    body: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> Expense:
    expense = Expense(**body.model_dump())
    db.add(expense)
    await db.flush()
    await db.refresh(expense)
    return expense


@router.get("", response_model=list[ExpenseResponse], summary="List expenses")
async def list_expenses(
    filter_: str | None = Query(None, alias="filter", pattern="^(today|week|month)$"),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[Expense]:
    """List expenses, optionally limited to today, the last 7 days, or this month (hotel time)."""
    today = hotel_now().date()
    query = select(Expense)
    if filter_ == "today":
        query = query.where(Expense.expense_date == today)
    elif filter_ == "week":
        query = query.where(Expense.expense_date >= today - timedelta(days=6), Expense.expense_date <= today)
    elif filter_ == "month":
        query = query.where(Expense.expense_date >= today.replace(day=1), Expense.expense_date <= today)

    result = await db.execute(query.order_by(Expense.expense_date.desc(), Expense.id.desc()))
    return list(result.scalars().all())


@router.delete("/{expense_id}", response_model=MessageResponse, summary="Delete an expense")
async def delete_expense(
    expense_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> dict:
    expense = await db.get(Expense, expense_id)
    if expense is None:
        raise NotFoundError("Expense not found")
    await db.delete(expense)
    await db.flush()
    return {"message": "Expense deleted"}
