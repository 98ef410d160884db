"""
Telegram Bot — chat front end for city weather searches.

Send a city name (or /weather <city>) and the bot replies with the
current conditions and an hourly snapshot. Every chat gets its own
Orchestrator (least recently used ones are dropped past MAX_CHAT_SESSIONS);
the blocking lookups run in a worker thread.
"""

import asyncio
import logging
from collections import OrderedDict

from telegram import Update
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from config import LOADING_NOTICE_TIMEOUT, MAX_CHAT_SESSIONS
from formatting import WeatherCard
from models import SearchState
from open_meteo import OpenMeteoClient
from orchestrator import Orchestrator

log = logging.getLogger(__name__)

LOADING_TEXT = "Loading…"
HELP_TEXT = (
    "Weather - Now. Commands:\n\n"
    "/weather <city>  — current weather for a city\n"
    "/help  — show this message\n\n"
    "Or just send a city name."
)


def format_reply(state: SearchState) -> str:
    """Plain-text rendering of a terminal search state."""
    if state.error is not None:
        return f"Error: {state.error.message}"
    if state.result is None:
        return LOADING_TEXT if state.loading else HELP_TEXT

    card = WeatherCard.build(state.result, state.location_name)
    lines = [
        f"{card.location} ({card.timezone})",
        f"{card.temperature} — {card.description}",
        f"Wind: {card.wind}",
        f"Measured at: {card.observed_at}",
    ]
    if card.hours:
        lines.append("")
        lines.append("Hourly snapshot:")
        lines.extend(f"  {h.label}  {h.temperature:>5}  {h.description}" for h in card.hours)
    return "\n".join(lines)


class WeatherBot:
    def __init__(self, client: OpenMeteoClient, max_sessions: int = MAX_CHAT_SESSIONS):
        self.client = client
        self.max_sessions = max_sessions
        self.sessions: OrderedDict[int, Orchestrator] = OrderedDict()

    def _session(self, chat_id: int, context: ContextTypes.DEFAULT_TYPE) -> Orchestrator:
        orchestrator = self.sessions.get(chat_id)
        if orchestrator is not None:
            self.sessions.move_to_end(chat_id)
            return orchestrator

        loop = asyncio.get_running_loop()
        bot = context.bot

        def on_change(state: SearchState):
            # Called from the worker thread. Waits for the notice so it
            # always lands before the reply.
            if not state.loading:
                return
            future = asyncio.run_coroutine_threadsafe(
                bot.send_message(chat_id=chat_id, text=LOADING_TEXT), loop
            )
            try:
                future.result(timeout=LOADING_NOTICE_TIMEOUT)
            except Exception as e:
                log.warning(f"Could not send loading notice to chat {chat_id}: {e!r}")

        orchestrator = Orchestrator(self.client, on_change=on_change)
        self.sessions[chat_id] = orchestrator
        while len(self.sessions) > self.max_sessions:
            evicted, _ = self.sessions.popitem(last=False)
            log.info(f"Dropped idle session for chat {evicted}")
        return orchestrator

    async def _search_and_reply(self, update: Update, context: ContextTypes.DEFAULT_TYPE, city: str):
        orchestrator = self._session(update.effective_chat.id, context)
        state = await asyncio.to_thread(orchestrator.handle_search, city)
        if orchestrator.state is not state:
            return  # superseded by a newer search in this chat
        await update.message.reply_text(format_reply(state))

    # ── Command handlers ────────────────────────────────────────

    async def cmd_help(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await update.message.reply_text(HELP_TEXT)

    async def cmd_weather(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        city = " ".join(context.args or [])
        await self._search_and_reply(update, context, city)

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Treat plain text as a city name."""
        text = update.message.text
        if text is None:
            return
        await self._search_and_reply(update, context, text)

    def build_application(self, token: str) -> Application:
        app = ApplicationBuilder().token(token).build()
        app.add_handler(CommandHandler("start", self.cmd_help))
        app.add_handler(CommandHandler("help", self.cmd_help))
        app.add_handler(CommandHandler("weather", self.cmd_weather))
        app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_message))
        return app
