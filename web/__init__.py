"""
Web UI — Flask front end for city weather searches.

Provides:
  - Search page with a single city field
  - Result card (current conditions + hourly snapshot) or an error box
  - REST API for programmatic access

Each request runs its own search; nothing is kept between requests.
"""

import logging
from typing import Optional

from flask import Flask, jsonify, render_template, request

from config import WEB_SECRET
from formatting import WeatherCard
from models import ErrorKind, SearchState
from open_meteo import OpenMeteoClient, RequestsTransport
from orchestrator import Orchestrator

log = logging.getLogger(__name__)

# HTTP status for each kind of failed search on the JSON API
ERROR_STATUS = {
    ErrorKind.EMPTY_INPUT: 400,
    ErrorKind.NO_GEOCODING_MATCH: 404,
    ErrorKind.NO_WEATHER_DATA: 404,
    ErrorKind.TRANSPORT: 502,
}


def create_app(client: Optional[OpenMeteoClient] = None) -> Flask:
    if client is None:
        client = OpenMeteoClient(RequestsTransport())

    app = Flask(__name__)
    app.secret_key = WEB_SECRET

    def _render(state: SearchState, query: str = ""):
        card = None
        if state.result is not None:
            card = WeatherCard.build(state.result, state.location_name)
        return render_template("index.html", state=state, card=card, query=query)

    # ── Pages ───────────────────────────────────────────────

    @app.route("/")
    def index():
        return _render(SearchState.idle())

    @app.route("/search", methods=["POST"])
    def search():
        # passed through untouched; the orchestrator does the trimming
        city = request.form.get("city", "")
        state = Orchestrator(client).handle_search(city)
        log.info(f"Search {city!r} → {state.status.value}")
        return _render(state, query=city)

    # ── API endpoints ───────────────────────────────────────

    @app.route("/api/weather", methods=["GET"])
    def api_weather():
        city = request.args.get("city", "")
        state = Orchestrator(client).handle_search(city)
        status = 200 if state.error is None else ERROR_STATUS[state.error.kind]
        return jsonify(state.to_dict()), status

    return app
