from __future__ import annotations

from datetime import datetime

from aiogram import Router
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import Message

from sleepcycle.bot.keyboards.common import bedtime_hour_keyboard
from sleepcycle.bot.routers.bedtime import TEXT_HINT, footnote, prompt_text, send_wake_times
from sleepcycle.services.sleep import InvalidTimestamp, parse_bedtime_text
from sleepcycle.services.timezone import resolve_timezone


router = Router(name="commands")


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    await message.answer(prompt_text(), reply_markup=bedtime_hour_keyboard().as_markup())


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(
        "I suggest wake-up times that land between sleep cycles.\n"
        "/start - pick a bedtime\n"
        "/wake 23:30 - wake-up times for a given bedtime\n"
        "You can also just send a time like 23:30 or 11:30 pm.\n\n"
        f"<i>{footnote()}</i>"
    )


@router.message(Command("wake"))
async def cmd_wake(message: Message, command: CommandObject) -> None:
    if not command.args:
        await cmd_start(message)
        return
    try:
        bedtime = parse_bedtime_text(command.args, datetime.now(resolve_timezone()))
    except InvalidTimestamp:
        await message.answer(TEXT_HINT, reply_markup=bedtime_hour_keyboard().as_markup())
        return
    await send_wake_times(message, bedtime)
