from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional

from dateutil import parser as date_parser


logger = logging.getLogger(__name__)

SLEEP_ONSET_MINUTES = 14
SLEEP_CYCLE_MINUTES = 90
WAKE_CYCLES = 6

CLOCK_12H = "12h"
CLOCK_24H = "24h"
CLOCK_FORMATS = (CLOCK_12H, CLOCK_24H)

BARE_HOUR_REGEX = re.compile(r"^\d{1,2}$")
CLOCK_TIME_REGEX = re.compile(r"\d{1,2}:\d{2}|\d\s*[ap]\.?m\b", re.IGNORECASE)


class InvalidTimestamp(ValueError):
    """Вход нельзя интерпретировать как календарное время."""


class CalendarArithmeticOverflow(OverflowError):
    """Сложение вышло за пределы представимых дат."""


@dataclass(frozen=True, slots=True)
class WakeTimeEntry:
    instant: datetime
    cycle_count: int
    formatted_hours: str
    formatted_time: str

    def as_dict(self) -> dict:
        return {
            "time": self.formatted_time,
            "cycles": self.cycle_count,
            "hours": self.formatted_hours,
        }


def add_minutes(value: datetime, minutes: int) -> datetime:
    """
    Прибавляет минуты к моменту времени.
    Для aware-дат считаем через UTC, чтобы переход на летнее/зимнее время
    учитывался как реально прошедшие минуты.
    """
    delta = timedelta(minutes=minutes)
    try:
        if value.tzinfo is None:
            return value + delta
        return (value.astimezone(timezone.utc) + delta).astimezone(value.tzinfo)
    except OverflowError as exc:
        raise CalendarArithmeticOverflow(
            f"{value.isoformat()} + {minutes} min is out of range"
        ) from exc


def _advance(value: datetime, minutes: int) -> datetime:
    try:
        return add_minutes(value, minutes)
    except CalendarArithmeticOverflow as exc:
        logger.warning(f"{exc}, keeping {value.isoformat()}")
        return value


def format_clock(value: datetime, clock_format: str = CLOCK_12H) -> str:
    if clock_format == CLOCK_12H:
        hour = value.hour % 12 or 12
        suffix = "AM" if value.hour < 12 else "PM"
        return f"{hour}:{value.minute:02d} {suffix}"
    if clock_format == CLOCK_24H:
        return f"{value.hour:02d}:{value.minute:02d}"
    raise ValueError(f"Unknown clock format: {clock_format!r}")


def format_hours(cycle: int, cycle_minutes: int = SLEEP_CYCLE_MINUTES) -> str:
    return f"{cycle * cycle_minutes / 60:.1f}"


def compute_wake_times(
    bedtime: datetime,
    *,
    onset_minutes: int = SLEEP_ONSET_MINUTES,
    cycle_minutes: int = SLEEP_CYCLE_MINUTES,
    cycles: int = WAKE_CYCLES,
    clock_format: str = CLOCK_12H,
) -> list[WakeTimeEntry]:
    if cycles < 1:
        raise ValueError("cycles must be positive")
    if clock_format not in CLOCK_FORMATS:
        raise ValueError(f"Unknown clock format: {clock_format!r}")

    wake = _advance(bedtime, onset_minutes)
    entries: list[WakeTimeEntry] = []
    for cycle in range(1, cycles + 1):
        # каждый подъём считается от предыдущего, а не от момента засыпания
        wake = _advance(wake, cycle_minutes)
        entries.append(
            WakeTimeEntry(
                instant=wake,
                cycle_count=cycle,
                formatted_hours=format_hours(cycle, cycle_minutes),
                formatted_time=format_clock(wake, clock_format),
            )
        )
    return entries


def attach_timezone(value: datetime, tz: Optional[tzinfo]) -> datetime:
    if tz is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=tz)


def parse_bedtime(value: str, tz: Optional[tzinfo] = None) -> datetime:
    """Строгий разбор ISO-8601. Наивным датам присваивается tz, если он передан."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidTimestamp("Empty timestamp")
    try:
        parsed = date_parser.isoparse(value.strip())
    except (ValueError, OverflowError) as exc:
        raise InvalidTimestamp(f"{value!r} is not an ISO-8601 timestamp") from exc
    return attach_timezone(parsed, tz)


def parse_bedtime_text(text: str, now: datetime) -> datetime:
    """
    Свободный ввод вида «23:30», «11:30 pm» или просто «23»; недостающие поля берутся из now.
    Голое число считается часом, а не днём месяца.
    """
    if not text or not text.strip():
        raise InvalidTimestamp("Empty timestamp")
    value = text.strip()
    if BARE_HOUR_REGEX.match(value):
        if int(value) > 23:
            raise InvalidTimestamp(f"{text!r} is not an hour")
        value = f"{int(value)}:00"
    elif not CLOCK_TIME_REGEX.search(value):
        raise InvalidTimestamp(f"{text!r} has no clock time")
    try:
        parsed = date_parser.parse(value, default=now.replace(second=0, microsecond=0))
    except (ValueError, OverflowError) as exc:
        raise InvalidTimestamp(f"{text!r} is not a time") from exc
    return attach_timezone(parsed, now.tzinfo)


def serialize_wake_times(entries: Iterable[WakeTimeEntry], indent: Optional[int] = None) -> str:
    return json.dumps(
        [entry.as_dict() for entry in entries],
        ensure_ascii=False,
        indent=indent,
    )
