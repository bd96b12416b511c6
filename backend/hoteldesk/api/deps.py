"""Shared API dependencies — single import point for all routers.

Re-exports database session and authentication dependencies so that router
modules can import everything they need from one place::

    from hoteldesk.api.deps import get_db, get_current_active_user
"""

from hoteldesk.auth.dependencies import (
    get_current_active_user,
    get_current_actor,
    get_current_user,
    require_admin,
)
from hoteldesk.database import get_db, get_session_factory

__all__ = [
    "get_db",
    "get_session_factory",
    "get_current_user",
    "get_current_active_user",
    "get_current_actor",
    "require_admin",
]
