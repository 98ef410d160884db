"""
Configuration — loads from .env, provides defaults.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Open-Meteo endpoints (anonymous, no API key)
GEOCODING_URL = os.getenv("GEOCODING_URL", "https://geocoding-api.open-meteo.com/v1/search")
FORECAST_URL = os.getenv("FORECAST_URL", "https://api.open-meteo.com/v1/forecast")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))  # seconds

# Query shape
GEOCODING_COUNT = 5
GEOCODING_LANGUAGE = "en"
FORECAST_DAYS = 2
HOURLY_SAMPLE_SIZE = 12

# Web UI
WEB_HOST = os.getenv("WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.getenv("WEB_PORT", "8080"))
WEB_SECRET = os.getenv("WEB_SECRET", "change-me-in-production")

# Telegram (optional; empty disables the bot)
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Telegram chats with a live search session; least recently used are dropped
MAX_CHAT_SESSIONS = int(os.getenv("MAX_CHAT_SESSIONS", "1000"))
LOADING_NOTICE_TIMEOUT = float(os.getenv("LOADING_NOTICE_TIMEOUT", "10"))  # seconds
