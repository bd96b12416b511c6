"""Hotel wall-clock helpers.

Booking timestamps are stored as naive datetimes in the hotel's timezone
(``settings.hotel_timezone``) so that stays compare consistently regardless
of what offset a client sent.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from hoteldesk.config import settings


def hotel_now() -> datetime:
    """Current wall-clock time at the hotel, without tzinfo."""
    return datetime.now(ZoneInfo(settings.hotel_timezone)).replace(tzinfo=None, microsecond=0)


def to_hotel_time(value: datetime | None) -> datetime | None:
    """Convert an aware datetime to naive hotel time; naive values are taken as-is."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(ZoneInfo(settings.hotel_timezone)).replace(tzinfo=None)
    return value
