"""
Web application module for the Hockey Coach substitution schedule application.

This module contains the Flask web server exposing JSON API endpoints for the
schedule grid, the substitution timeline and the live playback clock.
"""
import logging
import math
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from ..models import MatchSchedule
from ..services import (
    MatchRecordError, MatchRecordService, PlaybackService,
    ScheduleReconstructor, ScheduleValidationError, ServiceFactory,
)
from ..utils import (
    DEFAULT_LOOKAHEAD_SECONDS, PLAYBACK_SKIP_SECONDS, fmt_mmss,
    position_color, position_display_name,
)
from ..utils.constants import DEFAULT_WEB_HOST, DEFAULT_WEB_PORT

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Holds the schedule currently on screen and its playback clock; services
    are created through the ServiceFactory.
    """

    def __init__(self, record_service: Optional[MatchRecordService] = None):
        self.service_factory = ServiceFactory(record_service)
        self.reconstructor: Optional[ScheduleReconstructor] = None
        self.playback: Optional[PlaybackService] = None

    def load(self, record: Any) -> ScheduleReconstructor:
        """Replace the schedule on screen; the playback clock starts over."""
        services = self.service_factory.create_schedule_suite(record)
        self.reconstructor = services["reconstructor"]
        self.playback = services["playback"]
        return self.reconstructor


def _schedule_payload(reconstructor: ScheduleReconstructor, position_filter: Optional[str] = "all") -> dict:
    ms = reconstructor.match_schedule
    return {
        "match_id": ms.match_id,
        "formation_key": ms.formation_key,
        "quarters": reconstructor.quarters(),
        "subs_per_quarter": ms.subs_per_quarter,
        "quarter_duration_seconds": ms.quarter_duration_seconds,
        "positions": reconstructor.positions(),
        "position_labels": {
            position: {"label": position_display_name(position), "color": position_color(position)}
            for position in reconstructor.positions()
        },
        "grid": reconstructor.grid(position_filter),
        "timeline": [event.to_dict() for event in reconstructor.timeline],
    }


def _number_arg(data: Dict[str, Any], key: str, default: float) -> float:
    value = data.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number")
    if not math.isfinite(number):
        raise ValueError(f"{key} must be a finite number")
    return number


def create_app(app_state: Optional[WebAppState] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        app_state: State holder to serve; a fresh one is created when omitted

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    state = app_state or WebAppState()
    app.config["APP_STATE"] = state

    def _error(message: str, status: int) -> Tuple[Any, int]:
        return jsonify({"success": False, "error": message}), status

    def _require_schedule() -> Optional[Tuple[Any, int]]:
        if state.reconstructor is None or state.playback is None:
            return _error("No schedule loaded", 409)
        return None

    # ==================== Schedule Endpoints ==================== #

    @app.route("/api/schedule/reconstruct", methods=["POST"])
    def reconstruct_schedule():
        """Reconstruct a schedule sent in the request body and load it."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _error("JSON object required", 400)
        try:
            time = _number_arg(data, "time", 0)
            lookahead = _number_arg(data, "lookahead", DEFAULT_LOOKAHEAD_SECONDS)
        except ValueError as e:
            return _error(str(e), 400)

        reconstructor = state.load(data)
        payload = _schedule_payload(reconstructor, data.get("position") or "all")
        payload["snapshot"] = reconstructor.snapshot(time, lookahead)
        return jsonify({"success": True, **payload})

    @app.route("/api/matches/<match_id>/schedule", methods=["GET"])
    def load_match_schedule(match_id: str):
        """Fetch a match from the backend and load its schedule."""
        try:
            match_schedule = state.service_factory.get_record_service().fetch_match_or_raise(match_id)
        except MatchRecordError as e:
            logger.error("Error fetching substitution schedule: %s", e)
            return _error(str(e), 502)

        if match_schedule is None:
            return _error(f"Match {match_id} not found", 404)

        reconstructor = state.load(match_schedule)
        return jsonify({"success": True, **_schedule_payload(reconstructor, request.args.get("position", "all"))})

    @app.route("/api/schedule", methods=["GET"])
    def get_schedule():
        """Return grid and timeline of the loaded schedule."""
        missing = _require_schedule()
        if missing:
            return missing
        return jsonify({"success": True, **_schedule_payload(state.reconstructor, request.args.get("position", "all"))})

    @app.route("/api/schedule/snapshot", methods=["GET"])
    def get_snapshot():
        """Active players and upcoming substitutions at a given time."""
        missing = _require_schedule()
        if missing:
            return missing
        try:
            time = _number_arg(request.args, "time", 0)
            lookahead = _number_arg(request.args, "lookahead", DEFAULT_LOOKAHEAD_SECONDS)
        except ValueError as e:
            return _error(str(e), 400)

        snapshot = state.reconstructor.snapshot(time, lookahead)
        snapshot["time_display"] = fmt_mmss(time)
        return jsonify({"success": True, "snapshot": snapshot})

    @app.route("/api/schedule/validate", methods=["POST"])
    def validate_schedule():
        """Strictly validate a schedule record without loading it."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _error("JSON object required", 400)

        match_schedule = MatchSchedule.from_record(data)
        validator = state.service_factory.get_validator()
        try:
            validator.ensure_valid(
                match_schedule.schedule, match_schedule.quarters, match_schedule.subs_per_quarter
            )
        except ScheduleValidationError as e:
            return jsonify({"success": False, "errors": e.errors}), 422

        lineup_warnings = validator.compare_with_lineup(match_schedule.schedule, match_schedule.lineup)
        return jsonify({"success": True, "warnings": lineup_warnings})

    # ==================== Playback Endpoints ==================== #

    @app.route("/api/playback/state", methods=["GET"])
    def playback_state():
        missing = _require_schedule()
        if missing:
            return missing
        return jsonify({"success": True, "playback": state.playback.state()})

    @app.route("/api/playback/seek", methods=["POST"])
    def playback_seek():
        missing = _require_schedule()
        if missing:
            return missing
        data = request.get_json(silent=True) or {}
        try:
            time = _number_arg(data, "time", 0)
        except ValueError as e:
            return _error(str(e), 400)
        state.playback.seek(int(time))
        return jsonify({"success": True, "playback": state.playback.state()})

    @app.route("/api/playback/skip", methods=["POST"])
    def playback_skip():
        missing = _require_schedule()
        if missing:
            return missing
        data = request.get_json(silent=True) or {}
        try:
            seconds = _number_arg(data, "seconds", PLAYBACK_SKIP_SECONDS)
        except ValueError as e:
            return _error(str(e), 400)
        state.playback.skip(int(seconds))
        return jsonify({"success": True, "playback": state.playback.state()})

    @app.route("/api/playback/<action>", methods=["POST"])
    def playback_action(action: str):
        """Run play/pause/toggle/tick/reset on the playback clock."""
        missing = _require_schedule()
        if missing:
            return missing

        actions = {
            "play": state.playback.play,
            "pause": state.playback.pause,
            "toggle": state.playback.toggle,
            "tick": state.playback.tick,
            "reset": state.playback.reset,
        }
        handler = actions.get(action)
        if handler is None:
            return _error(f"Unknown playback action: {action}", 404)
        handler()
        return jsonify({"success": True, "playback": state.playback.state()})

    return app


def run_web_app(host: str = DEFAULT_WEB_HOST, port: int = DEFAULT_WEB_PORT) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
    """
    app = create_app()
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    run_web_app()
