from __future__ import annotations

from typing import Iterable

from aiogram.utils.keyboard import InlineKeyboardBuilder

from sleepcycle.services.sleep import WakeTimeEntry


MINUTE_STEP = 5


def bedtime_hour_keyboard() -> InlineKeyboardBuilder:
    builder = InlineKeyboardBuilder()
    builder.button(text="Now", callback_data="bedtime:now")
    # вечерние часы первыми, как их чаще всего выбирают
    for hour in list(range(18, 24)) + list(range(0, 18)):
        builder.button(text=f"{hour:02d}", callback_data=f"bedtime:hour:{hour}")
    builder.adjust(1, 6, 6, 6, 6)
    return builder


def bedtime_minute_keyboard(hour: int) -> InlineKeyboardBuilder:
    builder = InlineKeyboardBuilder()
    for minute in range(0, 60, MINUTE_STEP):
        builder.button(
            text=f"{hour:02d}:{minute:02d}",
            callback_data=f"bedtime:set:{hour}:{minute}",
        )
    builder.button(text="Back", callback_data="bedtime:back")
    builder.adjust(4, 4, 4, 1)
    return builder


def wake_times_keyboard(hour: int, minute: int, entries: Iterable[WakeTimeEntry]) -> InlineKeyboardBuilder:
    builder = InlineKeyboardBuilder()
    for entry in entries:
        builder.button(
            text=f"{entry.formatted_time} · {entry.formatted_hours} h",
            callback_data=f"wake:{hour}:{minute}:{entry.cycle_count}",
        )
    builder.button(text="Change bedtime", callback_data="bedtime:back")
    builder.adjust(2)
    return builder
