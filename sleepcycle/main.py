from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.types import BotCommand

from sleepcycle.bot.routers import bedtime, commands
from sleepcycle.config import settings


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)


async def setup_bot_commands(bot: Bot) -> None:
    """Устанавливает меню команд для бота"""
    commands_list = [
        BotCommand(command="start", description="Pick a bedtime"),
        BotCommand(command="wake", description="Wake-up times for a bedtime"),
        BotCommand(command="help", description="How it works"),
    ]
    await bot.set_my_commands(commands_list)


async def main() -> None:
    bot = Bot(
        token=settings.telegram_token.get_secret_value(),
        default=DefaultBotProperties(parse_mode="HTML"),
    )
    await setup_bot_commands(bot)
    dp = Dispatcher()
    # команды регистрируем раньше, чем обработчик свободного текста
    dp.include_router(commands.router)
    dp.include_router(bedtime.router)
    await dp.start_polling(bot)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
