"""
Orchestrator — drives one city search from input to display state.

A search is two dependent lookups: name → coordinates → weather.
``run_search`` yields every state the user should see along the way;
the Orchestrator class keeps the latest one for a session and tells a
listener about each change.

Flow:
  1. Clear (idle). Blank input fails here, no network call.
  2. Loading.
  3. Geocode the trimmed name; first candidate wins.
  4. Forecast for that candidate's coordinates.
  5. Success (result + "Name, Country") or failure with a user message.
"""

from __future__ import annotations
import logging
import threading
from typing import Callable, Iterator, Optional

from models import SearchError, SearchState
from open_meteo import OpenMeteoClient, TransportError

log = logging.getLogger(__name__)

StateCallback = Callable[[SearchState], None]


def run_search(city_name: str, client: OpenMeteoClient) -> Iterator[SearchState]:
    """Yield each state of a search; the last one is terminal."""
    yield SearchState.idle()

    if not city_name or not city_name.strip():
        yield SearchState.failed(SearchError.empty_input())
        return

    yield SearchState.loading_state()
    yield _resolve(city_name, client)


def _resolve(city_name: str, client: OpenMeteoClient) -> SearchState:
    try:
        places = client.resolve_coordinates(city_name.strip())
    except TransportError as e:
        log.warning(f"Geocoding failed for {city_name!r}: {e}")
        return SearchState.failed(SearchError.transport())

    if not places:
        log.info(f"No geocoding match for {city_name!r}")
        return SearchState.failed(SearchError.no_match(city_name))

    place = places[0]
    try:
        weather = client.resolve_weather(place.latitude, place.longitude)
    except TransportError as e:
        log.warning(f"Forecast failed for {place.display_name} ({place.latitude}, {place.longitude}): {e}")
        return SearchState.failed(SearchError.transport())

    if weather is None:
        log.info(f"No current weather for {place.display_name}")
        return SearchState.failed(SearchError.no_weather())

    return SearchState.succeeded(weather, place.display_name)


def search(city_name: str, client: OpenMeteoClient) -> SearchState:
    """Run a search to completion and return its terminal state."""
    state = SearchState.idle()
    for state in run_search(city_name, client):
        pass
    return state


class Orchestrator:
    """
    Holds the display state of one user session.

    Only the most recent submission may publish. A search that is overtaken
    by a newer one keeps running (its HTTP calls are not cancelled) but its
    remaining transitions are dropped.
    """

    def __init__(self, client: OpenMeteoClient, on_change: Optional[StateCallback] = None):
        # on_change(state) runs on the thread that performs the search
        self.client = client
        self._on_change = on_change
        self._state = SearchState.idle()
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def state(self) -> SearchState:
        return self._state

    def handle_search(self, city_name: str) -> SearchState:
        """Run a search for this session and return the final state it saw."""
        with self._lock:
            self._generation += 1
            generation = self._generation

        final = self._state
        for state in run_search(city_name, self.client):
            final = state
            if not self._publish(generation, state):
                log.info(f"Dropping stale search for {city_name!r} (superseded)")
                break
        return final

    def _publish(self, generation: int, state: SearchState) -> bool:
        with self._lock:
            if generation != self._generation:
                return False
            self._state = state
        if self._on_change:
            self._on_change(state)
        return True
