from open_meteo.client import OpenMeteoClient
from open_meteo.conditions import describe_condition_code
from open_meteo.transport import (
    MalformedResponseError,
    RequestsTransport,
    Transport,
    TransportError,
    TransportResponse,
)

__all__ = [
    "OpenMeteoClient",
    "describe_condition_code",
    "MalformedResponseError",
    "RequestsTransport",
    "Transport",
    "TransportError",
    "TransportResponse",
]
