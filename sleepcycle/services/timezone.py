from __future__ import annotations

import logging
from datetime import datetime, time, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sleepcycle.config import settings
from sleepcycle.services.sleep import InvalidTimestamp


logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"


def resolve_timezone(name: Optional[str] = None) -> ZoneInfo:
    """
    Возвращает ZoneInfo по имени.
    Если имя не указано или неизвестно, берётся settings.timezone, затем UTC.
    """
    for candidate in (name, settings.timezone):
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            logger.warning(f"Unknown timezone {candidate!r}, falling back")
    return ZoneInfo(DEFAULT_TIMEZONE)


def bedtime_at(hour: int, minute: int, tz: tzinfo, now: Optional[datetime] = None) -> datetime:
    try:
        clock = time(hour=hour, minute=minute)
    except (TypeError, ValueError) as exc:
        raise InvalidTimestamp(f"{hour}:{minute} is not a valid time") from exc
    today = (now or datetime.now(tz)).astimezone(tz).date()
    return datetime.combine(today, clock, tzinfo=tz)
