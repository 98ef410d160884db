"""
Entry point — serves the web UI and, when a token is configured,
the Telegram bot alongside it.

Usage:
  python main.py
"""

import logging
import threading

from config import LOG_LEVEL, TELEGRAM_BOT_TOKEN, WEB_HOST, WEB_PORT
from open_meteo import OpenMeteoClient, RequestsTransport

log = logging.getLogger("weather_now")


def run_web(client: OpenMeteoClient):
    """Run the Flask web UI (blocking)."""
    from web import create_app
    app = create_app(client)
    log.info(f"Web UI: http://{WEB_HOST}:{WEB_PORT}")
    app.run(host=WEB_HOST, port=WEB_PORT, use_reloader=False)


def start_web_in_thread(client: OpenMeteoClient):
    try:
        # Suppress Flask request logs in the main console
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
        run_web(client)
    except Exception as e:
        log.error(f"Web UI failed to start: {e}")


def main():
    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        level=LOG_LEVEL,
    )
    client = OpenMeteoClient(RequestsTransport())

    if not TELEGRAM_BOT_TOKEN:
        log.info("TELEGRAM_BOT_TOKEN not set, running the web UI only")
        run_web(client)
        return

    web_thread = threading.Thread(target=start_web_in_thread, args=(client,), daemon=True)
    web_thread.start()

    from bot import WeatherBot
    app = WeatherBot(client).build_application(TELEGRAM_BOT_TOKEN)
    log.info("Bot starting (Telegram polling)...")
    app.run_polling()


if __name__ == "__main__":
    main()
