import json

import pytest

from open_meteo import OpenMeteoClient, TransportError, TransportResponse

GEOCODING_URL = "https://geocoding.test/v1/search"
FORECAST_URL = "https://forecast.test/v1/forecast"


class FakeTransport:
    """Serves canned responses keyed by URL and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def respond(self, url, payload=None, status=200, body=None):
        if body is None:
            body = json.dumps(payload)
        self.routes[url] = TransportResponse(status_code=status, body=body)

    def fail(self, url, message="connection reset"):
        self.routes[url] = TransportError(message)

    def get(self, url, params):
        self.calls.append((url, dict(params)))
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route


def hourly_payload(n, start_hour=0):
    return {
        "time": [f"2024-01-01T{(start_hour + i) % 24:02d}:00" for i in range(n)],
        "temperature_2m": [10.0 + i for i in range(n)],
        "weathercode": [i % 4 for i in range(n)],
        "windspeed_10m": [5.0 + i for i in range(n)],
    }


LONDON = {
    "results": [
        {"name": "London", "country": "United Kingdom", "latitude": 51.51, "longitude": -0.13},
        {"name": "London", "country": "Canada", "latitude": 42.98, "longitude": -81.23},
    ]
}

LONDON_FORECAST = {
    "timezone": "Europe/London",
    "current_weather": {
        "temperature": 15.4,
        "windspeed": 10.2,
        "winddirection": 250.0,
        "weathercode": 3,
        "time": "2024-01-01T12:00",
    },
    "hourly": hourly_payload(20),
}


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return OpenMeteoClient(transport, geocoding_url=GEOCODING_URL, forecast_url=FORECAST_URL)


@pytest.fixture
def london(transport):
    transport.respond(GEOCODING_URL, LONDON)
    transport.respond(FORECAST_URL, LONDON_FORECAST)
    return transport
