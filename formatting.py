"""
Display formatting shared by the web UI and the Telegram bot.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models import WeatherResult
from open_meteo import describe_condition_code

MISSING = "–"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 → 3, -2.5 → -3)."""
    whole = math.floor(abs(value))
    # remainder test, floor(x + 0.5) misrounds 0.49999999999999994
    if abs(value) - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def format_temperature(value: Optional[float], unit: str = "°C") -> str:
    if value is None:
        return f"{MISSING}{unit}"
    return f"{round_half_away(value)}{unit}"


def format_wind(value: Optional[float]) -> str:
    if value is None:
        return f"{MISSING} km/h"
    return f"{round_half_away(value)} km/h"


def format_observed_at(value: datetime) -> str:
    return value.strftime("%a %d %b %Y, %H:%M")


def format_hour_label(value: datetime) -> str:
    return value.strftime("%H:%M")


@dataclass(frozen=True)
class HourCard:
    label: str
    temperature: str
    description: str


@dataclass(frozen=True)
class WeatherCard:
    location: str
    timezone: str
    temperature: str
    description: str
    wind: str
    observed_at: str
    hours: tuple[HourCard, ...]

    @classmethod
    def build(cls, result: WeatherResult, location_name: str) -> WeatherCard:
        current = result.current
        return cls(
            location=location_name or "Location",
            timezone=result.timezone,
            temperature=format_temperature(current.temperature),
            description=describe_condition_code(current.condition_code),
            wind=format_wind(current.windspeed),
            observed_at=format_observed_at(current.observed_at),
            hours=tuple(
                HourCard(
                    label=format_hour_label(h.time),
                    temperature=format_temperature(h.temperature, unit="°"),
                    description=describe_condition_code(h.condition_code),
                )
                for h in result.hourly
            ),
        )
