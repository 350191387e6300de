"""Aware datetimes for the domain layer, naive ones for storage.

Every stored column holds wall-clock time in ``APP_TIMEZONE`` without an
offset; repositories convert on the way in and out.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def app_timezone() -> tzinfo:
    """Return the zone named by ``APP_TIMEZONE``, or UTC when it is unknown."""

    name = (get_settings().app_timezone or "").strip()
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown APP_TIMEZONE %r; using UTC", name)
        return timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default for ``created_at`` and ``updated_at``."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert to the app zone; naive input is taken as app wall time."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=app_timezone())
    return value.astimezone(app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    aware = ensure_app_timezone(value)
    return aware.replace(tzinfo=None) if aware is not None else None
