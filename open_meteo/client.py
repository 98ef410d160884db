"""
Open-Meteo client — geocoding + forecast, free, no API key required.

Each call is a single GET through the injected transport; payloads are
shaped into the records in models.py.
"""

from __future__ import annotations
import logging
from typing import Optional

from config import (
    FORECAST_DAYS,
    FORECAST_URL,
    GEOCODING_COUNT,
    GEOCODING_LANGUAGE,
    GEOCODING_URL,
    HOURLY_SAMPLE_SIZE,
)
from models import HourlyPoint, PlaceCandidate, WeatherResult, WeatherSnapshot
from open_meteo.transport import MalformedResponseError, Transport, TransportError

log = logging.getLogger(__name__)

HOURLY_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "relativehumidity_2m",
    "weathercode",
    "windspeed_10m",
)


def _at(values: list, i: int):
    return values[i] if i < len(values) else None


class OpenMeteoClient:
    def __init__(self, transport: Transport, geocoding_url: str = GEOCODING_URL,
                 forecast_url: str = FORECAST_URL):
        self.transport = transport
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url

    def _get_json(self, url: str, params: dict, label: str) -> dict:
        log.debug(f"{label} request: {params}")
        resp = self.transport.get(url, params)
        if not resp.ok:
            log.warning(f"{label} API error: {resp.status_code}")
            raise TransportError(f"{label} API error: {resp.status_code}", resp.status_code)
        data = resp.json()
        if not isinstance(data, dict):
            raise MalformedResponseError(f"{label} API returned a non-object body", resp.status_code)
        return data

    def resolve_coordinates(self, city_name: str) -> list[PlaceCandidate]:
        """
        Look up candidate places for a city name, best match first.
        An empty list means the city was not found.
        """
        data = self._get_json(
            self.geocoding_url,
            {
                "name": city_name.strip(),
                "count": GEOCODING_COUNT,
                "language": GEOCODING_LANGUAGE,
                "format": "json",
            },
            "Geocoding",
        )
        results = data.get("results") or []
        places = []
        for raw in results:
            try:
                places.append(PlaceCandidate.from_api(raw))
            except (KeyError, TypeError, ValueError) as e:
                log.warning(f"Skipping unusable geocoding result {raw!r}: {e!r}")
        if results and not places:
            raise MalformedResponseError(f"No usable geocoding result among {len(results)}")
        return places

    def resolve_weather(self, latitude: float, longitude: float) -> Optional[WeatherResult]:
        """
        Current conditions plus the first hours of the hourly forecast.
        Returns None when the response has no current_weather block.
        """
        data = self._get_json(
            self.forecast_url,
            {
                "latitude": latitude,
                "longitude": longitude,
                "current_weather": "true",
                "hourly": ",".join(HOURLY_FIELDS),
                "forecast_days": FORECAST_DAYS,
                # localize timestamps to the coordinates
                "timezone": "auto",
            },
            "Forecast",
        )
        current = data.get("current_weather")
        # an empty block carries no reading, same as a missing one
        if not current:
            return None

        hourly = data.get("hourly") or {}
        times = hourly.get("time") or []
        temps = hourly.get("temperature_2m") or []
        codes = hourly.get("weathercode") or []
        winds = hourly.get("windspeed_10m") or []

        try:
            points = tuple(
                HourlyPoint.from_api(t, _at(temps, i), _at(codes, i), _at(winds, i))
                for i, t in enumerate(times[:HOURLY_SAMPLE_SIZE])
            )
            snapshot = WeatherSnapshot.from_api(current)
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponseError(f"Unexpected forecast payload: {e}") from e

        return WeatherResult(current=snapshot, hourly=points, timezone=data.get("timezone") or "")
