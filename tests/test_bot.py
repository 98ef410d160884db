import asyncio
from unittest import mock

from conftest import GEOCODING_URL
from models import SearchState
from bot import HELP_TEXT, LOADING_TEXT, WeatherBot, format_reply
from orchestrator import search


def _update(text, chat_id=42):
    update = mock.Mock()
    update.effective_chat.id = chat_id
    update.message.text = text
    update.message.reply_text = mock.AsyncMock()
    return update


def _context(args=None):
    context = mock.Mock()
    context.args = args
    context.bot.send_message = mock.AsyncMock()
    return context


def test_format_reply_success(client, london):
    text = format_reply(search("London", client))

    assert text.startswith("London, United Kingdom (Europe/London)")
    assert "15°C — Overcast" in text
    assert "Wind: 10 km/h" in text
    assert "Measured at: Mon 01 Jan 2024, 12:00" in text
    assert "Hourly snapshot:" in text
    assert len([line for line in text.splitlines() if line.startswith("  ")]) == 12


def test_format_reply_error(client, transport):
    assert format_reply(search(" ", client)) == "Error: Please enter a city name."


def test_format_reply_idle(client):
    assert format_reply(SearchState.idle()) == HELP_TEXT
    assert format_reply(SearchState.loading_state()) == LOADING_TEXT


def test_message_runs_search_and_replies(client, london):
    bot = WeatherBot(client)
    update, context = _update("London"), _context()

    asyncio.run(bot.handle_message(update, context))

    context.bot.send_message.assert_called_once_with(chat_id=42, text=LOADING_TEXT)
    reply = update.message.reply_text.call_args.args[0]
    assert reply.startswith("London, United Kingdom")
    assert bot.sessions[42].state.location_name == "London, United Kingdom"


def test_weather_command_joins_args(client, transport):
    transport.respond(GEOCODING_URL, {})
    bot = WeatherBot(client)
    update, context = _update("/weather New York"), _context(["New", "York"])

    asyncio.run(bot.cmd_weather(update, context))

    update.message.reply_text.assert_called_once_with('Error: No results found for "New York"')


def test_blank_weather_command_skips_loading(client, transport):
    bot = WeatherBot(client)
    update, context = _update("/weather"), _context([])

    asyncio.run(bot.cmd_weather(update, context))

    context.bot.send_message.assert_not_called()
    update.message.reply_text.assert_called_once_with("Error: Please enter a city name.")
    assert transport.calls == []


def test_each_chat_has_its_own_session(client, london):
    bot = WeatherBot(client)

    asyncio.run(bot.handle_message(_update("London", chat_id=1), _context()))
    asyncio.run(bot.handle_message(_update(" ", chat_id=2), _context()))

    assert bot.sessions[1].state.result is not None
    assert bot.sessions[2].state.error is not None


def test_failed_loading_notice_is_logged_and_reply_still_sent(client, london, caplog):
    bot = WeatherBot(client)
    update, context = _update("London"), _context()
    context.bot.send_message.side_effect = RuntimeError("flood control")

    asyncio.run(bot.handle_message(update, context))

    assert "Could not send loading notice to chat 42" in caplog.text
    assert "flood control" in caplog.text
    assert update.message.reply_text.call_args.args[0].startswith("London, United Kingdom")


def test_loading_notice_is_sent_before_the_reply(client, london):
    bot = WeatherBot(client)
    update, context = _update("London"), _context()
    order = []
    context.bot.send_message.side_effect = lambda **kw: order.append(kw["text"])
    update.message.reply_text.side_effect = lambda text: order.append("reply")

    asyncio.run(bot.handle_message(update, context))

    assert order == [LOADING_TEXT, "reply"]


def test_sessions_are_capped_least_recently_used_first(client, transport):
    bot = WeatherBot(client, max_sessions=2)

    for chat_id in (1, 2, 1, 3):
        asyncio.run(bot.handle_message(_update(" ", chat_id=chat_id), _context()))

    assert list(bot.sessions) == [1, 3]
