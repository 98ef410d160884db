"""
Data models for places, weather readings and search state.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


def _parse_time(value: str) -> datetime:
    # Open-Meteo sends local wall-clock times without an offset ("2024-01-01T12:00")
    return datetime.fromisoformat(value)


def _opt_float(value) -> Optional[float]:
    return None if value is None else float(value)


def _opt_int(value) -> Optional[int]:
    return None if value is None else int(value)


@dataclass(frozen=True)
class PlaceCandidate:
    name: str
    latitude: float
    longitude: float
    country: Optional[str] = None

    @classmethod
    def from_api(cls, raw: dict) -> PlaceCandidate:
        return cls(
            name=raw["name"],
            latitude=float(raw["latitude"]),
            longitude=float(raw["longitude"]),
            country=raw.get("country") or None,
        )

    @property
    def display_name(self) -> str:
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name


@dataclass(frozen=True)
class WeatherSnapshot:
    temperature: Optional[float]  # °C
    windspeed: Optional[float]  # km/h
    winddirection: Optional[float]  # degrees
    condition_code: Optional[int]
    observed_at: datetime

    @classmethod
    def from_api(cls, raw: dict) -> WeatherSnapshot:
        """Build from a forecast ``current_weather`` block."""
        return cls(
            temperature=_opt_float(raw.get("temperature")),
            windspeed=_opt_float(raw.get("windspeed")),
            winddirection=_opt_float(raw.get("winddirection")),
            condition_code=_opt_int(raw.get("weathercode")),
            observed_at=_parse_time(raw["time"]),
        )

    def to_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "windspeed": self.windspeed,
            "winddirection": self.winddirection,
            "condition_code": self.condition_code,
            "observed_at": self.observed_at.isoformat(),
        }


@dataclass(frozen=True)
class HourlyPoint:
    time: datetime
    temperature: Optional[float] = None
    condition_code: Optional[int] = None
    windspeed: Optional[float] = None

    @classmethod
    def from_api(cls, time: str, temperature=None, condition_code=None, windspeed=None) -> HourlyPoint:
        return cls(
            time=_parse_time(time),
            temperature=_opt_float(temperature),
            condition_code=_opt_int(condition_code),
            windspeed=_opt_float(windspeed),
        )

    def to_dict(self) -> dict:
        return {
            "time": self.time.isoformat(),
            "temperature": self.temperature,
            "condition_code": self.condition_code,
            "windspeed": self.windspeed,
        }


@dataclass(frozen=True)
class WeatherResult:
    current: WeatherSnapshot
    hourly: tuple[HourlyPoint, ...] = ()
    timezone: str = ""

    def to_dict(self) -> dict:
        return {
            "current": self.current.to_dict(),
            "hourly": [h.to_dict() for h in self.hourly],
            "timezone": self.timezone,
        }


# ── Errors shown to the user ────────────────────────────────────

class ErrorKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    NO_GEOCODING_MATCH = "no_geocoding_match"
    TRANSPORT = "transport"
    NO_WEATHER_DATA = "no_weather_data"


@dataclass(frozen=True)
class SearchError:
    message: str
    kind: ErrorKind

    @classmethod
    def empty_input(cls) -> SearchError:
        return cls("Please enter a city name.", ErrorKind.EMPTY_INPUT)

    @classmethod
    def no_match(cls, city_name: str) -> SearchError:
        # Quotes the input exactly as submitted, whitespace included
        return cls(f'No results found for "{city_name}"', ErrorKind.NO_GEOCODING_MATCH)

    @classmethod
    def transport(cls) -> SearchError:
        return cls("Network error or API error. Please try again.", ErrorKind.TRANSPORT)

    @classmethod
    def no_weather(cls) -> SearchError:
        return cls("Weather data not available for that location.", ErrorKind.NO_WEATHER_DATA)

    def to_dict(self) -> dict:
        return {"message": self.message, "kind": self.kind.value}


# ── Search state ────────────────────────────────────────────────

class SearchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class SearchState:
    """
    One snapshot of what the user sees.

    Exactly four configurations are valid:
      idle:     nothing set
      loading:  nothing set, loading
      success:  result (and location) set
      failure:  error set
    """

    status: SearchStatus = SearchStatus.IDLE
    result: Optional[WeatherResult] = None
    location_name: str = ""
    error: Optional[SearchError] = None

    def __post_init__(self):
        has_result = self.result is not None
        has_error = self.error is not None
        if self.status is SearchStatus.SUCCESS:
            ok = has_result and not has_error
        elif self.status is SearchStatus.FAILURE:
            ok = has_error and not has_result
        else:
            ok = not has_result and not has_error and not self.location_name
        if not ok:
            raise ValueError(f"Inconsistent search state: {self.status.value}")

    @classmethod
    def idle(cls) -> SearchState:
        return cls()

    @classmethod
    def loading_state(cls) -> SearchState:
        return cls(status=SearchStatus.LOADING)

    @classmethod
    def succeeded(cls, result: WeatherResult, location_name: str) -> SearchState:
        return cls(status=SearchStatus.SUCCESS, result=result, location_name=location_name)

    @classmethod
    def failed(cls, error: SearchError) -> SearchState:
        return cls(status=SearchStatus.FAILURE, error=error)

    @property
    def loading(self) -> bool:
        return self.status is SearchStatus.LOADING

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "loading": self.loading,
            "location": self.location_name or None,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error.to_dict() if self.error else None,
        }
