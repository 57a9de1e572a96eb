from __future__ import annotations

import logging
from datetime import datetime

from aiogram import F, Router
from aiogram.types import CallbackQuery, Message

from sleepcycle.bot.keyboards.common import (
    bedtime_hour_keyboard,
    bedtime_minute_keyboard,
    wake_times_keyboard,
)
from sleepcycle.config import settings
from sleepcycle.services.sleep import (
    InvalidTimestamp,
    WakeTimeEntry,
    compute_wake_times,
    format_clock,
    parse_bedtime_text,
)
from sleepcycle.services.timezone import bedtime_at, resolve_timezone


logger = logging.getLogger(__name__)

router = Router(name="bedtime")

TITLE = "Sleep Cycle Calculator"
PROMPT = "I plan to go to bed at:"
RESULTS_HEADER = "Recommended wake-up times:"
TEXT_HINT = "Send a bedtime like 23:30 or 11:30 pm, or pick one below."


def footnote() -> str:
    return (
        f"Calculations include {settings.sleep_onset_minutes} minutes to fall asleep.\n"
        f"Each sleep cycle is {settings.sleep_cycle_minutes} minutes."
    )


def prompt_text() -> str:
    return f"<b>{TITLE}</b>\n\n{PROMPT}\n\n<i>{footnote()}</i>"


def calculate(bedtime: datetime) -> list[WakeTimeEntry]:
    return compute_wake_times(
        bedtime,
        onset_minutes=settings.sleep_onset_minutes,
        cycle_minutes=settings.sleep_cycle_minutes,
        cycles=settings.wake_cycles,
        clock_format=settings.clock_format,
    )


def format_entry_line(entry: WakeTimeEntry) -> str:
    return f"<b>{entry.formatted_time}</b> · {entry.formatted_hours} hours ({entry.cycle_count} cycles)"


def render_wake_times(bedtime: datetime, entries: list[WakeTimeEntry]) -> str:
    lines = [
        f"Bedtime: {format_clock(bedtime, settings.clock_format)}",
        "",
        RESULTS_HEADER,
    ]
    lines.extend(format_entry_line(entry) for entry in entries)
    lines.extend(["", f"<i>{footnote()}</i>"])
    return "\n".join(lines)


def tap_text(entry: WakeTimeEntry) -> str:
    return f"Wake at {entry.formatted_time}: {entry.formatted_hours} hours of sleep ({entry.cycle_count} cycles)"


async def send_wake_times(message: Message, bedtime: datetime, edit: bool = False) -> None:
    entries = calculate(bedtime)
    text = render_wake_times(bedtime, entries)
    markup = wake_times_keyboard(bedtime.hour, bedtime.minute, entries).as_markup()
    logger.info(f"Computed {len(entries)} wake times for bedtime {bedtime.isoformat()}")
    if edit:
        await message.edit_text(text, reply_markup=markup)
    else:
        await message.answer(text, reply_markup=markup)


@router.callback_query(F.data == "bedtime:now")
async def handle_bedtime_now(callback: CallbackQuery) -> None:
    bedtime = datetime.now(resolve_timezone()).replace(second=0, microsecond=0)
    await send_wake_times(callback.message, bedtime, edit=True)
    await callback.answer()


@router.callback_query(F.data == "bedtime:back")
async def handle_bedtime_back(callback: CallbackQuery) -> None:
    await callback.message.edit_text(
        prompt_text(),
        reply_markup=bedtime_hour_keyboard().as_markup(),
    )
    await callback.answer()


@router.callback_query(F.data.startswith("bedtime:hour:"))
async def handle_bedtime_hour(callback: CallbackQuery) -> None:
    hour = int(callback.data.split(":")[2])
    await callback.message.edit_text(
        f"<b>{TITLE}</b>\n\n{PROMPT} {hour:02d}:…",
        reply_markup=bedtime_minute_keyboard(hour).as_markup(),
    )
    await callback.answer()


@router.callback_query(F.data.startswith("bedtime:set:"))
async def handle_bedtime_set(callback: CallbackQuery) -> None:
    _, _, hour, minute = callback.data.split(":")
    try:
        bedtime = bedtime_at(int(hour), int(minute), resolve_timezone())
    except InvalidTimestamp:
        await callback.answer("Unknown bedtime, pick it again.", show_alert=True)
        return
    await send_wake_times(callback.message, bedtime, edit=True)
    await callback.answer()


@router.callback_query(F.data.startswith("wake:"))
async def handle_wake_time_tap(callback: CallbackQuery) -> None:
    _, hour, minute, cycles = callback.data.split(":")
    try:
        bedtime = bedtime_at(int(hour), int(minute), resolve_timezone())
    except InvalidTimestamp:
        await callback.answer("Unknown bedtime, pick it again.", show_alert=True)
        return
    entry = next((item for item in calculate(bedtime) if item.cycle_count == int(cycles)), None)
    if entry is None:
        await callback.answer("This result is out of date.", show_alert=True)
        return
    await callback.answer(tap_text(entry))


@router.message(F.text & ~F.text.startswith("/"))
async def handle_bedtime_text(message: Message) -> None:
    now = datetime.now(resolve_timezone())
    try:
        bedtime = parse_bedtime_text(message.text, now)
    except InvalidTimestamp:
        await message.answer(TEXT_HINT, reply_markup=bedtime_hour_keyboard().as_markup())
        return
    await send_wake_times(message, bedtime)
