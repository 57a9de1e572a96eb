import asyncio
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

from sleepcycle.bot.keyboards.common import (
    bedtime_hour_keyboard,
    bedtime_minute_keyboard,
    wake_times_keyboard,
)
from sleepcycle.bot.routers import bedtime, commands
from sleepcycle.services.sleep import compute_wake_times


def _buttons(builder):
    return [button for row in builder.as_markup().inline_keyboard for button in row]


def test_hour_keyboard_starts_with_now():
    buttons = _buttons(bedtime_hour_keyboard())
    assert buttons[0].callback_data == "bedtime:now"
    assert len(buttons) == 25
    assert buttons[1].callback_data == "bedtime:hour:18"


def test_minute_keyboard_steps_five_minutes():
    buttons = _buttons(bedtime_minute_keyboard(23))
    assert buttons[0].text == "23:00"
    assert buttons[0].callback_data == "bedtime:set:23:0"
    assert buttons[11].text == "23:55"
    assert buttons[-1].callback_data == "bedtime:back"


def test_wake_times_keyboard_links_each_cycle():
    entries = compute_wake_times(datetime(2026, 10, 19, 22, 0))
    buttons = _buttons(wake_times_keyboard(22, 0, entries))
    assert [button.callback_data for button in buttons[:6]] == [f"wake:22:0:{cycle}" for cycle in range(1, 7)]
    assert buttons[5].text == "7:14 AM · 9.0 h"


def test_render_wake_times():
    moment = datetime(2026, 10, 19, 22, 0)
    text = bedtime.render_wake_times(moment, bedtime.calculate(moment))
    assert text.startswith("Bedtime: 10:00 PM")
    assert bedtime.RESULTS_HEADER in text
    assert "<b>7:14 AM</b> · 9.0 hours (6 cycles)" in text
    assert "Calculations include 14 minutes to fall asleep." in text


def test_wake_time_tap_answers_with_entry():
    callback = SimpleNamespace(data="wake:22:0:6", answer=AsyncMock())
    asyncio.run(bedtime.handle_wake_time_tap(callback))
    callback.answer.assert_awaited_once_with("Wake at 7:14 AM: 9.0 hours of sleep (6 cycles)")


def test_wake_time_tap_unknown_cycle():
    callback = SimpleNamespace(data="wake:22:0:9", answer=AsyncMock())
    asyncio.run(bedtime.handle_wake_time_tap(callback))
    callback.answer.assert_awaited_once_with("This result is out of date.", show_alert=True)


def test_text_bedtime_sends_results():
    message = SimpleNamespace(text="22:00", answer=AsyncMock())
    asyncio.run(bedtime.handle_bedtime_text(message))
    text = message.answer.await_args.args[0]
    assert "11:44 PM" in text
    assert "7:14 AM" in text


def test_text_bedtime_hint_on_garbage():
    message = SimpleNamespace(text="banana", answer=AsyncMock())
    asyncio.run(bedtime.handle_bedtime_text(message))
    assert message.answer.await_args.args[0] == bedtime.TEXT_HINT


def _callback(data):
    message = SimpleNamespace(edit_text=AsyncMock(), answer=AsyncMock())
    return SimpleNamespace(data=data, message=message, answer=AsyncMock())


def test_wake_command_with_time():
    message = SimpleNamespace(answer=AsyncMock())
    asyncio.run(commands.cmd_wake(message, SimpleNamespace(args="22:00")))
    assert "7:14 AM" in message.answer.await_args.args[0]


def test_wake_command_with_bare_hour():
    message = SimpleNamespace(answer=AsyncMock())
    asyncio.run(commands.cmd_wake(message, SimpleNamespace(args="22")))
    assert "11:44 PM" in message.answer.await_args.args[0]


def test_wake_command_without_args_shows_picker():
    message = SimpleNamespace(answer=AsyncMock())
    asyncio.run(commands.cmd_wake(message, SimpleNamespace(args=None)))
    assert message.answer.await_args.args[0] == bedtime.prompt_text()
    markup = message.answer.await_args.kwargs["reply_markup"]
    assert markup.inline_keyboard[0][0].callback_data == "bedtime:now"


def test_wake_command_with_garbage():
    message = SimpleNamespace(answer=AsyncMock())
    asyncio.run(commands.cmd_wake(message, SimpleNamespace(args="soon")))
    assert message.answer.await_args.args[0] == bedtime.TEXT_HINT


def test_bedtime_set_edits_message_with_results():
    callback = _callback("bedtime:set:22:0")
    asyncio.run(bedtime.handle_bedtime_set(callback))
    text = callback.message.edit_text.await_args.args[0]
    assert text.startswith("Bedtime: 10:00 PM")
    assert "<b>7:14 AM</b> · 9.0 hours (6 cycles)" in text
    markup = callback.message.edit_text.await_args.kwargs["reply_markup"]
    assert markup.inline_keyboard[0][0].callback_data == "wake:22:0:1"
    callback.answer.assert_awaited_once_with()


def test_bedtime_set_out_of_range_alerts():
    callback = _callback("bedtime:set:24:0")
    asyncio.run(bedtime.handle_bedtime_set(callback))
    callback.message.edit_text.assert_not_awaited()
    callback.answer.assert_awaited_once_with("Unknown bedtime, pick it again.", show_alert=True)


def test_bedtime_now_edits_message_with_results():
    callback = _callback("bedtime:now")
    asyncio.run(bedtime.handle_bedtime_now(callback))
    text = callback.message.edit_text.await_args.args[0]
    assert bedtime.RESULTS_HEADER in text
    assert text.count(" cycles)") == 6
    callback.answer.assert_awaited_once_with()


def test_bedtime_hour_shows_minute_picker():
    callback = _callback("bedtime:hour:23")
    asyncio.run(bedtime.handle_bedtime_hour(callback))
    markup = callback.message.edit_text.await_args.kwargs["reply_markup"]
    assert markup.inline_keyboard[0][0].text == "23:00"
    assert markup.inline_keyboard[0][0].callback_data == "bedtime:set:23:0"
    callback.answer.assert_awaited_once_with()


def test_bedtime_back_shows_hour_picker():
    callback = _callback("bedtime:back")
    asyncio.run(bedtime.handle_bedtime_back(callback))
    assert callback.message.edit_text.await_args.args[0] == bedtime.prompt_text()
    callback.answer.assert_awaited_once_with()
