"""GST settings API router."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.api.deps import get_current_active_user, get_db
from hoteldesk.models.settings import GSTSetting
from hoteldesk.models.user import User
from hoteldesk.schemas.auth import MessageResponse
from hoteldesk.schemas.back_office import GSTSettingResponse, GSTSettingUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gst", tags=["gst"])


@router.get("", response_model=list[GSTSettingResponse], summary="List GST settings")
async def list_gst_settings(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> list[GSTSetting]:
    result = await db.execute(select(GSTSetting).order_by(GSTSetting.category))
    return list(result.scalars().all())


@router.put("", response_model=MessageResponse, summary="Update GST settings in bulk")
async def update_gst_settings(
    body: list[GSTSettingUpdate],
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_active_user),
) -> dict:
    """Upsert one setting per category; the whole batch commits or none of it does."""
    result = await db.execute(
        select(GSTSetting).where(GSTSetting.category.in_([entry.category for entry in body]))
    )
    by_category = {setting.category: setting for setting in result.scalars().all()}

    for entry in body:
        setting = by_category.get(entry.category)
        if setting is None:
            setting = GSTSetting(category=entry.category)
            db.add(setting)
            by_category[entry.category] = setting
        setting.gst_rate = entry.gst_rate
        setting.is_enabled = entry.is_enabled

    await db.flush()
    logger.info("GST settings updated for %d categories", len(by_category))
    return {"message": "GST settings updated successfully"}
